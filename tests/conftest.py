import sys
from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager
from sqlalchemy import select
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession

sys.path.append(str(Path(__file__).resolve().parents[1]))

from imeliq.config import Settings
from imeliq.models import AuditLogEntry, AuditAction

ADMIN_PASSWORD = "correct horse battery staple"
SESSION_SECRET = "test-session-secret"
API_KEY = "test-api-key"


@pytest.fixture()
def test_db_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"


@pytest.fixture()
def settings(test_db_url: str) -> Settings:
    return Settings(
        debug=True,
        database_url=test_db_url,
        admin_password=ADMIN_PASSWORD,
        session_secret=SESSION_SECRET,
        api_key=API_KEY,
    )


@pytest.fixture()
def app(settings: Settings):
    from imeliq.main import create_app
    return create_app(settings)


@pytest_asyncio.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            yield ac


@pytest_asyncio.fixture()
async def production_client(settings: Settings, test_db_url: str) -> AsyncIterator[AsyncClient]:
    """Client for the app with debug off. Startup does not create tables then, so do it here."""
    from imeliq.main import create_app
    from imeliq.models import Base

    engine = create_async_engine(test_db_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()

    app = create_app(settings.model_copy(update={"debug": False}))
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
            yield ac


@pytest_asyncio.fixture()
async def admin_client(client: AsyncClient) -> AsyncClient:
    resp = await client.post("/api/admin/auth", json={"password": ADMIN_PASSWORD})
    assert resp.status_code == 200
    return client


@pytest.fixture()
def audit_entries(test_db_url: str):
    """Read back audit rows, optionally only those for one action."""
    async def _read(action: AuditAction | None = None) -> list[AuditLogEntry]:
        engine = create_async_engine(test_db_url)
        try:
            async with AsyncSession(engine) as session:
                stmt = select(AuditLogEntry).order_by(AuditLogEntry.timestamp)
                if action is not None:
                    stmt = stmt.where(AuditLogEntry.action == action)
                result = await session.execute(stmt)
                return list(result.scalars().all())
        finally:
            await engine.dispose()
    
    return _read
