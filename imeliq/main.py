import logging
from typing import Optional

from litestar import Litestar, Request
from litestar.datastructures import State
from litestar.di import Provide
from litestar.exceptions import HTTPException, ValidationException
from litestar.plugins.sqlalchemy import SQLAlchemyAsyncConfig, SQLAlchemyInitPlugin
from litestar.response import Response
from litestar.status_codes import HTTP_500_INTERNAL_SERVER_ERROR

from imeliq.api.dependencies import provide_audit_log, provide_settings
from imeliq.audit import AuditLogger
from imeliq.config import Settings, load_env_file
from imeliq.errors import ConfigurationError, ImeliqError, StoreError
from imeliq.models import Base  # Import models Base for table creation
from imeliq.routes import ROUTES
from imeliq.utils.logging import log_request_error, set_debug

logger = logging.getLogger("Imeliq")


# --- Exception handlers

def handle_app_error(request: Request, exc: ImeliqError) -> Response:
    """Known errors: JSON body with a readable ``error``."""
    content = {"error": exc.message}

    if isinstance(exc, ConfigurationError):
        logger.error(f"Configuration error on {request.url.path}: {exc.message}")

    if isinstance(exc, StoreError) and request.app.debug:
        settings: Settings = request.app.state.settings
        content["details"] = exc.details
        content["env_check"] = {
            "has_database_url": bool(settings.database_url),
            "has_admin_password": bool(settings.admin_password),
            "has_session_secret": bool(settings.session_secret),
            "has_api_key": bool(settings.api_key),
        }

    return Response(content=content, status_code=exc.status_code, media_type="application/json")


def handle_validation_error(request: Request, exc: ValidationException) -> Response:
    """Malformed request bodies and parameters."""
    fields = exc.extra if isinstance(exc.extra, list) else []
    problems = [
        f"{item.get('key')}: {item.get('message')}"
        for item in fields
        if isinstance(item, dict) and item.get("key")
    ]
    message = "Invalid request" + (f" ({'; '.join(problems)})" if problems else "")
    return Response(
        content={"error": message, "fields": fields},
        status_code=exc.status_code,
        media_type="application/json",
    )


def handle_http_error(request: Request, exc: HTTPException) -> Response:
    """Framework errors (401, 404, 405, ...) in the same JSON shape."""
    return Response(
        content={"error": exc.detail},
        status_code=exc.status_code,
        media_type="application/json",
    )


def log_exceptions(request: Request, exc: Exception) -> Response:
    log_request_error(request, exc, message="Unhandled exception occurred")
    return Response(
        content={"error": "Internal Server Error"},
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        media_type="application/json",
    )


# --- App factory

def create_app(settings: Optional[Settings] = None) -> Litestar:
    """Build the app from validated settings. Raises ConfigurationError when misconfigured."""
    if settings is None:
        load_env_file()
        settings = Settings.from_env()

    logging.basicConfig(
        level=logging.DEBUG if settings.debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    settings = settings.validated()
    set_debug(settings.debug)
    logger.info(f"Starting app in {'DEBUG' if settings.debug else 'PRODUCTION'} mode")

    alchemy_config = SQLAlchemyAsyncConfig(
        connection_string=settings.database_url,
        session_dependency_key="session",
        metadata=Base.metadata,
        create_all=settings.debug,  # Auto-create tables on startup (dev only)
    )
    audit_log = AuditLogger(alchemy_config.create_session_maker())

    return Litestar(
        route_handlers=ROUTES,
        debug=settings.debug,
        plugins=[SQLAlchemyInitPlugin(alchemy_config)],
        dependencies={
            "settings": Provide(provide_settings, sync_to_thread=False),
            "audit_log": Provide(provide_audit_log, sync_to_thread=False),
        },
        state=State({"settings": settings, "audit_log": audit_log}),
        exception_handlers={
            ImeliqError: handle_app_error,
            ValidationException: handle_validation_error,
            HTTPException: handle_http_error,
            Exception: log_exceptions,
        },
    )


def run() -> None:
    """Serve the app with uvicorn (``imeliq`` console script)."""
    import uvicorn

    uvicorn.run("imeliq.main:create_app", factory=True, host="0.0.0.0", port=8000)
