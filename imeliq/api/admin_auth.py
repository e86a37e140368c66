"""Admin password login, session check and logout."""

import hmac
import logging

from litestar import Controller, Request, Response, delete, get, post
from litestar.status_codes import HTTP_200_OK
from pydantic import BaseModel

from imeliq.audit import AuditLogger
from imeliq.auth.guards import has_valid_session
from imeliq.auth.session import (
    SESSION_COOKIE_NAME,
    SESSION_MAX_AGE_SECONDS,
    issue_session_token,
)
from imeliq.config import Settings
from imeliq.errors import AuthError, ConfigurationError
from imeliq.models import AuditAction

logger = logging.getLogger("Imeliq.auth")


class LoginRequest(BaseModel):
    """Admin login form."""
    password: str = ""


class SessionStatusResponse(BaseModel):
    authenticated: bool


def password_matches(provided: str, expected: str) -> bool:
    return hmac.compare_digest(provided.encode("utf-8"), expected.encode("utf-8"))


class AdminAuthController(Controller):
    """Issue, check and clear the admin session cookie."""
    
    path = "/api/admin/auth"
    tags = ["admin"]
    
    @post("/", status_code=HTTP_200_OK)
    async def login(
        self,
        request: Request,
        data: LoginRequest,
        settings: Settings,
        audit_log: AuditLogger,
    ) -> Response:
        """Log in with the admin password."""
        if not settings.admin_password:
            logger.error("IMELIQ_ADMIN_PASSWORD not configured!")
            raise ConfigurationError("Admin not configured")
        
        if not password_matches(data.password, settings.admin_password):
            await audit_log.record(
                AuditAction.LOGIN_FAILED, request, {"reason": "invalid_password"}
            )
            raise AuthError("Invalid password")
        
        response = Response({"success": True, "message": "Logged in"})
        response.set_cookie(
            SESSION_COOKIE_NAME,
            issue_session_token(settings.session_secret),
            max_age=SESSION_MAX_AGE_SECONDS,
            path="/",
            httponly=True,
            secure=not settings.debug,
            samesite="strict",
        )
        
        await audit_log.record(AuditAction.LOGIN_SUCCESS, request)
        return response
    
    @get("/")
    async def check_session(self, request: Request, settings: Settings) -> SessionStatusResponse:
        """Report whether the caller holds a valid admin session."""
        return SessionStatusResponse(authenticated=has_valid_session(request, settings))
    
    @delete("/", status_code=HTTP_200_OK)
    async def logout(self, request: Request, audit_log: AuditLogger) -> Response:
        """Clear the admin session cookie."""
        response = Response({"success": True, "message": "Logged out"})
        response.delete_cookie(SESSION_COOKIE_NAME, path="/")
        
        await audit_log.record(AuditAction.LOGOUT, request)
        return response
