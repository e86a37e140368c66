"""Logging helpers: debug-only logging and errors with request context."""

import logging
import traceback
from os import getenv
from typing import Optional, Any

DEBUG = getenv("APP_DEBUG", "false").lower() == "true"

logger = logging.getLogger("Imeliq")


def set_debug(enabled: bool) -> None:
    """Switch debug-only logging on or off for the running app."""
    global DEBUG
    DEBUG = enabled


def debug_log(message: str, *args, **kwargs) -> None:
    """Log a debug message only if APP_DEBUG is enabled."""
    if DEBUG:
        level = kwargs.pop("level", logging.DEBUG)
        logger.log(level, message, *args, **kwargs)


def error_log(
    message: str,
    exc: Optional[Exception] = None,
    context: Optional[dict] = None,
) -> None:
    """
    Log an error with optional context and exception.
    
    Args:
        message: Error message
        exc: Optional exception object
        context: Optional mapping with extra context (path, method, ...)
    """
    parts = [message]
    
    if context:
        parts.append("Context: " + ", ".join(f"{k}={v}" for k, v in context.items()))
    
    if exc:
        parts.append(f"Exception: {type(exc).__name__}: {exc}")
        if DEBUG:
            parts.append("Traceback:\n" + "".join(
                traceback.format_exception(type(exc), exc, exc.__traceback__)
            ))
    
    full_message = " | ".join(parts)
    if exc:
        logger.error(full_message, exc_info=exc)
    else:
        logger.error(full_message)


def request_context(request: Any) -> dict:
    """Path, method and user agent of a request, whatever can be read."""
    context = {}
    url = getattr(request, "url", None)
    if url is not None:
        context["path"] = getattr(url, "path", str(url))
    method = getattr(request, "method", None)
    if method:
        context["method"] = method
    headers = getattr(request, "headers", None)
    if headers is not None:
        context["user_agent"] = headers.get("user-agent", "unknown")
    return context


def log_request_error(
    request: Any,
    exc: Exception,
    message: Optional[str] = None
) -> None:
    """Log an exception together with the request it happened in."""
    error_log(
        message or f"Unhandled exception: {type(exc).__name__}",
        exc=exc,
        context=request_context(request),
    )
