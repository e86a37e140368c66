"""Feedback API endpoint."""

import logging
from typing import Optional

from litestar import Controller, post
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from imeliq.api.register import IntakeResponse
from imeliq.errors import store_error_from
from imeliq.models import Feedback, Feeling

logger = logging.getLogger("Imeliq.feedback")


# --- Request Schemas ---

class FeedbackRequest(BaseModel):
    """Request to submit product feedback."""
    model_config = ConfigDict(str_strip_whitespace=True)
    
    product_code: str = Field(..., min_length=1, max_length=100)
    referrer_name: str = Field(..., min_length=1, max_length=200)
    feeling: Feeling
    comments: Optional[str] = Field(default=None, max_length=5000)


# --- Controller ---

class FeedbackController(Controller):
    """API endpoint for feedback submission."""
    
    path = "/api/feedback"
    tags = ["intake"]
    
    @post("/")
    async def submit_feedback(
        self,
        data: FeedbackRequest,
        session: AsyncSession,
    ) -> IntakeResponse:
        """Submit feedback after trying the product."""
        feedback = Feedback(
            product_code=data.product_code,
            referrer_name=data.referrer_name,
            feeling=data.feeling,
            comments=data.comments or None,
        )
        session.add(feedback)
        try:
            await session.commit()
            await session.refresh(feedback)
        except SQLAlchemyError as e:
            await session.rollback()
            raise store_error_from(e, "saving feedback")
        
        logger.info(f"Feedback saved for product {data.product_code} ({data.feeling.value})")
        
        return IntakeResponse(
            success=True,
            message="Feedback saved!",
            data=feedback.to_record(),
        )
