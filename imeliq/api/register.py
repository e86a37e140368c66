"""Tester registration API endpoint."""

import hashlib
import logging
from typing import Any, Optional

from litestar import Controller, Request, post
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from imeliq.audit import AuditLogger
from imeliq.errors import ConflictError, store_error_from
from imeliq.models import Tester, AuditAction, SUPPORTED_LOCALES, DEFAULT_LOCALE

logger = logging.getLogger("Imeliq.register")

EMAIL_HASH_LENGTH = 12


def email_fingerprint(email: str) -> str:
    """Short one-way identifier for an email, safe to put in logs."""
    digest = hashlib.sha256(email.strip().lower().encode("utf-8")).hexdigest()
    return digest[:EMAIL_HASH_LENGTH]


# --- Request/Response Schemas ---

class RegisterTesterRequest(BaseModel):
    """Request to register as a product tester."""
    model_config = ConfigDict(str_strip_whitespace=True)
    
    name: str = Field(..., min_length=1, max_length=200)
    family_name: Optional[str] = Field(default=None, max_length=200)
    email: EmailStr
    phone: Optional[str] = Field(default=None, max_length=50)
    marketing_consent: bool = False
    locale: str = DEFAULT_LOCALE
    
    @field_validator("locale")
    @classmethod
    def check_locale(cls, value: str) -> str:
        if value not in SUPPORTED_LOCALES:
            raise ValueError(f"locale must be one of {', '.join(SUPPORTED_LOCALES)}")
        return value


class IntakeResponse(BaseModel):
    """Response after a public submission was stored."""
    success: bool
    message: str
    data: dict[str, Any]


# --- Controller ---

class RegisterController(Controller):
    """API endpoint for tester registration."""
    
    path = "/api/register"
    tags = ["intake"]
    
    @post("/")
    async def register_tester(
        self,
        request: Request,
        data: RegisterTesterRequest,
        session: AsyncSession,
        audit_log: AuditLogger,
    ) -> IntakeResponse:
        """Register a tester. Each email may register once."""
        tester = Tester(
            name=data.name,
            family_name=data.family_name or None,
            email=str(data.email).lower(),
            phone=data.phone or None,
            marketing_consent=data.marketing_consent,
            locale=data.locale,
        )
        session.add(tester)
        try:
            await session.commit()
            await session.refresh(tester)
        except IntegrityError:
            await session.rollback()
            logger.info(f"Duplicate tester registration ({email_fingerprint(data.email)})")
            raise ConflictError("This email is already registered")
        except SQLAlchemyError as e:
            await session.rollback()
            raise store_error_from(e, "registering tester")
        
        record = tester.to_record()
        await audit_log.record(
            AuditAction.TESTER_REGISTERED,
            request,
            {"email_hash": email_fingerprint(data.email), "locale": data.locale},
        )
        
        return IntakeResponse(
            success=True,
            message="Registration received, thank you!",
            data=record,
        )
