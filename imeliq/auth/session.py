"""Stateless admin session tokens.

A token is ``<timestamp>-<nonce>-<signature>``:

* ``timestamp``: issue time in milliseconds since the epoch, base 36
* ``nonce``: random hex
* ``signature``: HMAC-SHA256 of ``timestamp-nonce`` keyed by the session
  secret, truncated to ``SIGNATURE_LENGTH`` hex characters

Validation recomputes the signature, so a token cannot be forged from the
format alone. Nothing is stored server-side.
"""

import hashlib
import hmac
import secrets
import string
import time
from typing import Optional

SESSION_COOKIE_NAME = "session"
SESSION_MAX_AGE_SECONDS = 24 * 60 * 60
SIGNATURE_LENGTH = 16
NONCE_BYTES = 8

_BASE36_ALPHABET = string.digits + string.ascii_lowercase


def to_base36(value: int) -> str:
    if value < 0:
        raise ValueError("base36 encoding needs a non-negative integer")
    if value == 0:
        return "0"
    digits = []
    while value:
        value, remainder = divmod(value, 36)
        digits.append(_BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def _now_ms(now: Optional[float]) -> int:
    return int((time.time() if now is None else now) * 1000)


def _sign(secret: str, payload: str) -> str:
    digest = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256)
    return digest.hexdigest()[:SIGNATURE_LENGTH]


def issue_session_token(secret: str, now: Optional[float] = None) -> str:
    """Issue a token for a freshly authenticated admin. ``now`` is epoch seconds."""
    timestamp = to_base36(_now_ms(now))
    nonce = secrets.token_hex(NONCE_BYTES)
    return f"{timestamp}-{nonce}-{_sign(secret, f'{timestamp}-{nonce}')}"


def validate_session_token(
    token: Optional[str],
    secret: str,
    now: Optional[float] = None,
    max_age_seconds: int = SESSION_MAX_AGE_SECONDS,
) -> bool:
    """True when the token is well formed, correctly signed and younger than max age.

    The age check is strict: a token exactly ``max_age_seconds`` old is expired.
    """
    if not token:
        return False
    
    parts = token.split("-")
    if len(parts) != 3 or not all(parts):
        return False
    timestamp, nonce, signature = parts
    
    try:
        issued_ms = int(timestamp, 36)
    except ValueError:
        return False
    
    expected = _sign(secret, f"{timestamp}-{nonce}")
    if not hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8")):
        return False
    
    age_ms = _now_ms(now) - issued_ms
    if age_ms < 0:
        return False
    return age_ms < max_age_seconds * 1000
