"""Route guards for the admin API."""

import hmac
import logging
from typing import Optional

from litestar.connection import ASGIConnection
from litestar.exceptions import NotAuthorizedException
from litestar.handlers.base import BaseRouteHandler

from imeliq.auth.session import SESSION_COOKIE_NAME, validate_session_token
from imeliq.config import Settings
from imeliq.utils.logging import debug_log

logger = logging.getLogger("Imeliq.auth")


def has_valid_session(connection: ASGIConnection, settings: Settings) -> bool:
    token = connection.cookies.get(SESSION_COOKIE_NAME)
    return validate_session_token(token, settings.session_secret)


def bearer_token(connection: ASGIConnection) -> Optional[str]:
    header = connection.headers.get("authorization")
    if not header or not header.startswith("Bearer "):
        return None
    return header[len("Bearer "):].strip() or None


def has_valid_api_key(connection: ASGIConnection, settings: Settings) -> bool:
    """Bearer access is off unless an API key is configured."""
    if not settings.api_key:
        return False
    token = bearer_token(connection)
    if token is None:
        return False
    return hmac.compare_digest(token.encode("utf-8"), settings.api_key.encode("utf-8"))


async def require_admin_session(connection: ASGIConnection, handler: BaseRouteHandler) -> None:
    """Guard requiring a valid admin session cookie."""
    settings: Settings = connection.app.state.settings
    path = connection.url.path
    
    if not has_valid_session(connection, settings):
        logger.warning(f"Admin access attempted without a valid session: {path}")
        raise NotAuthorizedException("Unauthorized")
    
    debug_log("Admin session accepted for %s", path)


async def require_admin_access(connection: ASGIConnection, handler: BaseRouteHandler) -> None:
    """Guard accepting either an admin session cookie or the bearer API key."""
    settings: Settings = connection.app.state.settings
    path = connection.url.path
    
    if has_valid_session(connection, settings):
        debug_log("Admin session accepted for %s", path)
        return
    if has_valid_api_key(connection, settings):
        debug_log("API key accepted for %s", path)
        return
    
    logger.warning(f"Admin data access attempted without credentials: {path}")
    raise NotAuthorizedException("Unauthorized")
