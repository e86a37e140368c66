import pytest

from imeliq.api.register import email_fingerprint
from imeliq.models import AuditAction


# --- Tester registration

@pytest.mark.asyncio
async def test_register_tester(client, admin_client, audit_entries):
    payload = {
        "name": "Mari",
        "family_name": "Maasikas",
        "email": "mari@example.ee",
        "phone": "+372 5555 5555",
        "marketing_consent": True,
        "locale": "en",
    }
    resp = await client.post("/api/register", json=payload)
    assert resp.status_code == 201
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["email"] == "mari@example.ee"
    assert body["data"]["marketing_consent"] is True
    assert body["data"]["locale"] == "en"

    # retrievable through the admin API
    listing = await admin_client.get("/api/admin/data", params={"type": "testers"})
    testers = listing.json()["data"]["testers"]
    assert [t["email"] for t in testers] == ["mari@example.ee"]

    # audit entry carries a fingerprint, never the raw address
    entries = await audit_entries(AuditAction.TESTER_REGISTERED)
    assert len(entries) == 1
    assert entries[0].details["email_hash"] == email_fingerprint("mari@example.ee")
    assert "mari@example.ee" not in str(entries[0].details)


@pytest.mark.asyncio
async def test_register_defaults(client):
    resp = await client.post("/api/register", json={"name": "Jaan", "email": "jaan@example.ee"})
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["locale"] == "et"
    assert data["marketing_consent"] is False
    assert data["family_name"] is None
    assert data["phone"] is None


@pytest.mark.asyncio
async def test_register_duplicate_email_conflicts(client):
    payload = {"name": "Kati", "email": "kati@example.ee"}
    first = await client.post("/api/register", json=payload)
    assert first.status_code == 201

    second = await client.post("/api/register", json={"name": "Kati 2", "email": "KATI@example.ee"})
    assert second.status_code == 409
    assert "already registered" in second.json()["error"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"email": "no-name@example.ee"},
        {"name": "", "email": "empty-name@example.ee"},
        {"name": "   ", "email": "blank-name@example.ee"},
        {"name": "No Email"},
        {"name": "Bad Email", "email": "not-an-email"},
        {"name": "Bad Locale", "email": "locale@example.ee", "locale": "de"},
    ],
)
async def test_register_rejects_invalid_input(client, payload):
    resp = await client.post("/api/register", json=payload)
    assert resp.status_code == 400
    assert "error" in resp.json()


def test_email_fingerprint_is_stable_and_short():
    assert email_fingerprint("Mari@Example.ee ") == email_fingerprint("mari@example.ee")
    assert len(email_fingerprint("mari@example.ee")) == 12


# --- Feedback

@pytest.mark.asyncio
async def test_submit_feedback(client):
    resp = await client.post(
        "/api/feedback",
        json={"product_code": "IMQ-01", "referrer_name": "Mari", "feeling": "energy", "comments": "Great!"},
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["feeling"] == "energy"
    assert data["comments"] == "Great!"


@pytest.mark.asyncio
async def test_feedback_empty_comments_stored_as_null(client):
    resp = await client.post(
        "/api/feedback",
        json={"product_code": "IMQ-01", "referrer_name": "Mari", "feeling": "nothing", "comments": ""},
    )
    assert resp.status_code == 201
    assert resp.json()["data"]["comments"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"product_code": "IMQ-01", "referrer_name": "Mari", "feeling": "happy"},
        {"product_code": "IMQ-01", "referrer_name": "Mari"},
        {"product_code": "IMQ-01", "feeling": "energy"},
        {"referrer_name": "Mari", "feeling": "energy"},
    ],
)
async def test_feedback_rejects_invalid_input(client, payload):
    resp = await client.post("/api/feedback", json=payload)
    assert resp.status_code == 400
    assert "error" in resp.json()


# --- Orders

@pytest.mark.asyncio
async def test_submit_order_reports_total(client):
    resp = await client.post(
        "/api/order",
        json={"email": "a@b.ee", "quantity": 3, "pickup_location": "tallinn", "gave_data": False},
    )
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["quantity"] == 3
    assert data["gave_data"] is False
    assert data["price_per_unit"] == 2
    assert data["total"] == 6
    assert data["status"] == "pending"
    assert data["pickup_location"] == "tallinn"


@pytest.mark.asyncio
async def test_order_defaults(client):
    resp = await client.post("/api/order", json={"email": "a@b.ee", "pickup_location": "courier"})
    assert resp.status_code == 201
    data = resp.json()["data"]
    assert data["quantity"] == 1
    assert data["price_per_unit"] == 1
    assert data["total"] == 1


@pytest.mark.asyncio
async def test_order_accepts_matching_client_price(client):
    resp = await client.post(
        "/api/order",
        json={"email": "a@b.ee", "quantity": 5, "price_per_unit": 2, "gave_data": False, "pickup_location": "parnu"},
    )
    assert resp.status_code == 201
    assert resp.json()["data"]["total"] == 10


@pytest.mark.asyncio
@pytest.mark.parametrize("quantity", [1, 50, 100])
async def test_order_quantity_in_range(client, quantity):
    resp = await client.post(
        "/api/order",
        json={"email": "a@b.ee", "quantity": quantity, "pickup_location": "tartu"},
    )
    assert resp.status_code == 201
    assert resp.json()["data"]["total"] == quantity


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        {"email": "a@b.ee", "quantity": 0, "pickup_location": "tallinn"},
        {"email": "a@b.ee", "quantity": 101, "pickup_location": "tallinn"},
        {"email": "a@b.ee", "quantity": "lots", "pickup_location": "tallinn"},
        {"email": "a@b.ee", "quantity": 2.5, "pickup_location": "tallinn"},
        {"email": "a@b.ee", "quantity": 1, "pickup_location": "riga"},
        {"email": "a@b.ee", "quantity": 1},
        {"email": "ab.ee", "quantity": 1, "pickup_location": "parnu"},
        {"quantity": 1, "pickup_location": "vantaa"},
        {"email": "a@b.ee", "quantity": 1, "price_per_unit": 0, "pickup_location": "tallinn"},
        {"email": "a@b.ee", "quantity": 100, "price_per_unit": "0.01", "pickup_location": "tallinn"},
        {"email": "a@b.ee", "quantity": 1, "price_per_unit": 1, "gave_data": False, "pickup_location": "tallinn"},
    ],
)
async def test_order_rejects_invalid_input(client, payload):
    resp = await client.post("/api/order", json=payload)
    assert resp.status_code == 400
    assert "error" in resp.json()
