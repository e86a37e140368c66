"""Request metadata used by the audit log."""

from litestar.connection import ASGIConnection

UNKNOWN = "unknown"


def client_ip(connection: ASGIConnection) -> str:
    """First hop of X-Forwarded-For, then X-Real-IP, then the socket peer."""
    forwarded = connection.headers.get("x-forwarded-for")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    real_ip = connection.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()
    if connection.client and connection.client.host:
        return connection.client.host
    return UNKNOWN


def user_agent(connection: ASGIConnection) -> str:
    return connection.headers.get("user-agent") or UNKNOWN
