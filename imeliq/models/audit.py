"""Audit log model for security- and data-sensitive actions."""

import enum
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import DateTime, String, Enum, JSON
from sqlalchemy.orm import Mapped, mapped_column

from imeliq.models.base import Base, utcnow


class AuditAction(str, enum.Enum):
    """Actions recorded in the audit log."""
    
    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAILED = "LOGIN_FAILED"
    LOGOUT = "LOGOUT"
    DATA_ACCESS = "DATA_ACCESS"
    DATA_EXPORT = "DATA_EXPORT"
    DATA_DELETE = "DATA_DELETE"
    DATA_UPDATE = "DATA_UPDATE"
    TESTER_REGISTERED = "TESTER_REGISTERED"


class AuditLogEntry(Base):
    """Append-only audit record. Never updated or deleted by the application."""
    
    __tablename__ = "audit_log"
    
    timestamp: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
        index=True,
    )
    action: Mapped[AuditAction] = mapped_column(
        Enum(AuditAction, native_enum=False, length=32),
        nullable=False,
        index=True,
    )
    actor_ip: Mapped[str] = mapped_column(String(64), nullable=False, default="unknown")
    user_agent: Mapped[str] = mapped_column(String(500), nullable=False, default="unknown")
    details: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
    
    def __repr__(self) -> str:
        return f"<AuditLogEntry {self.action.value} {self.actor_ip} ({self.timestamp})>"
