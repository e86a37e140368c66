"""Order API endpoint."""

import logging
from decimal import Decimal
from typing import Optional

from litestar import Controller, post
from pydantic import BaseModel, ConfigDict, EmailStr, Field, model_validator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from imeliq.api.register import IntakeResponse
from imeliq.errors import store_error_from
from imeliq.models import Order, OrderStatus, PickupLocation, MIN_QUANTITY, MAX_QUANTITY
from imeliq.models.order import unit_price

logger = logging.getLogger("Imeliq.order")


# --- Request Schemas ---

class OrderRequest(BaseModel):
    """Request to pre-order product units.

    A missing quantity means one unit. Anything that is not a whole number
    in range is rejected rather than coerced. The unit price follows from
    ``gave_data``; a client-sent price is only accepted if it agrees.
    """
    model_config = ConfigDict(str_strip_whitespace=True)
    
    email: EmailStr
    quantity: int = Field(default=MIN_QUANTITY, ge=MIN_QUANTITY, le=MAX_QUANTITY)
    gave_data: bool = True
    price_per_unit: Optional[Decimal] = Field(default=None, gt=0, max_digits=10, decimal_places=2)
    pickup_location: PickupLocation
    
    @model_validator(mode="after")
    def check_price(self) -> "OrderRequest":
        expected = unit_price(self.gave_data)
        if self.price_per_unit is not None and self.price_per_unit != expected:
            raise ValueError(f"price_per_unit must be {expected} for this order")
        return self


# --- Controller ---

class OrderController(Controller):
    """API endpoint for order submission."""
    
    path = "/api/order"
    tags = ["intake"]
    
    @post("/")
    async def submit_order(
        self,
        data: OrderRequest,
        session: AsyncSession,
    ) -> IntakeResponse:
        """Place an order. Orders start out pending."""
        order = Order(
            email=str(data.email),
            quantity=data.quantity,
            gave_data=data.gave_data,
            price_per_unit=unit_price(data.gave_data),
            pickup_location=data.pickup_location,
            status=OrderStatus.PENDING,
        )
        session.add(order)
        try:
            await session.commit()
            await session.refresh(order)
        except SQLAlchemyError as e:
            await session.rollback()
            raise store_error_from(e, "saving order")
        
        logger.info(f"Order saved: {order.quantity} x {order.pickup_location.value}")
        
        record = order.to_record()
        record["total"] = float(order.total)
        return IntakeResponse(
            success=True,
            message="Order received!",
            data=record,
        )
