"""Feedback model for post-trial product reactions."""

import enum
from typing import Optional

from sqlalchemy import String, Text, Enum
from sqlalchemy.orm import Mapped, mapped_column

from imeliq.models.base import Base


class Feeling(str, enum.Enum):
    """How the tester felt after using the product."""
    
    NOTHING = "nothing"
    ENERGY = "energy"
    OTHER = "other"


class Feedback(Base):
    """Product feedback submission."""
    
    __tablename__ = "feedback"
    
    product_code: Mapped[str] = mapped_column(String(100), nullable=False)
    referrer_name: Mapped[str] = mapped_column(String(200), nullable=False)
    feeling: Mapped[Feeling] = mapped_column(
        Enum(Feeling, values_callable=lambda cls: [m.value for m in cls], native_enum=False),
        nullable=False,
    )
    comments: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    
    def __repr__(self) -> str:
        return f"<Feedback {self.product_code} {self.feeling.value} ({self.created_at})>"
