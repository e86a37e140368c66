"""Tester model for product trial registrations."""

from typing import Optional

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from imeliq.models.base import Base

SUPPORTED_LOCALES = ("et", "en", "es", "sv", "fi")
DEFAULT_LOCALE = "et"


class Tester(Base):
    """A person registered to trial the product."""
    
    __tablename__ = "testers"
    
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    family_name: Mapped[Optional[str]] = mapped_column(String(200), nullable=True)
    email: Mapped[str] = mapped_column(String(200), nullable=False, unique=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    marketing_consent: Mapped[bool] = mapped_column(default=False, nullable=False)
    locale: Mapped[str] = mapped_column(String(5), default=DEFAULT_LOCALE, nullable=False)
    
    def __repr__(self) -> str:
        return f"<Tester {self.email} ({self.created_at})>"
