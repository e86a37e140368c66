"""Audit log sink.

Every authentication and admin data event is written twice: as a structured
``[AUDIT]`` log line and as a row in ``audit_log``. The row is committed in
its own session, so it is kept even when the request's own database work
fails afterwards.
"""

import json
import logging
from typing import Any, Callable, Optional

from litestar.connection import ASGIConnection
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from imeliq.models import AuditLogEntry, AuditAction
from imeliq.models.base import utcnow
from imeliq.utils.logging import error_log
from imeliq.utils.request import client_ip, user_agent

logger = logging.getLogger("Imeliq.audit")


class AuditLogger:
    """Append-only writer for audit entries."""
    
    def __init__(self, session_maker: Callable[[], AsyncSession]) -> None:
        self._session_maker = session_maker
    
    async def record(
        self,
        action: AuditAction,
        connection: ASGIConnection,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        """Write one audit entry for ``action`` performed by the caller of ``connection``."""
        entry = AuditLogEntry(
            timestamp=utcnow(),
            action=action,
            actor_ip=client_ip(connection),
            user_agent=user_agent(connection),
            details=details or {},
        )
        
        logger.info("[AUDIT] %s", json.dumps({
            "timestamp": entry.timestamp.isoformat(),
            "action": action.value,
            "ip": entry.actor_ip,
            "userAgent": entry.user_agent,
            **entry.details,
        }, default=str))
        
        try:
            async with self._session_maker() as session:
                session.add(entry)
                await session.commit()
        except SQLAlchemyError as e:
            # The log line above is the fallback record
            error_log("Could not persist audit entry", exc=e, context={"action": action.value})
        
