"""Order model for paid product pre-orders."""

import enum
from decimal import Decimal

from sqlalchemy import String, Integer, Numeric, Enum, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column

from imeliq.models.base import Base

MIN_QUANTITY = 1
MAX_QUANTITY = 100
# Buyers who shared their data pay the lower price
PRICE_WITH_DATA = Decimal("1")
PRICE_WITHOUT_DATA = Decimal("2")
DEFAULT_PRICE_PER_UNIT = PRICE_WITH_DATA


def unit_price(gave_data: bool) -> Decimal:
    return PRICE_WITH_DATA if gave_data else PRICE_WITHOUT_DATA


class PickupLocation(str, enum.Enum):
    """Where the customer collects the order."""
    
    COURIER = "courier"
    TALLINN = "tallinn"
    PARNU = "parnu"
    TARTU = "tartu"
    VANTAA = "vantaa"


class OrderStatus(str, enum.Enum):
    """Order lifecycle. Status only ever moves forward."""
    
    PENDING = "pending"
    CONFIRMED = "confirmed"
    DELIVERED = "delivered"
    
    @property
    def rank(self) -> int:
        return list(OrderStatus).index(self)
    
    def can_transition_to(self, target: "OrderStatus") -> bool:
        """Forward moves (skipping allowed) and staying put are valid."""
        return target.rank >= self.rank


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class Order(Base):
    """Pre-order for additional product units."""
    
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint(
            f"quantity >= {MIN_QUANTITY} AND quantity <= {MAX_QUANTITY}",
            name="ck_orders_quantity_range",
        ),
    )
    
    email: Mapped[str] = mapped_column(String(200), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    gave_data: Mapped[bool] = mapped_column(default=True, nullable=False)
    price_per_unit: Mapped[Decimal] = mapped_column(
        Numeric(10, 2),
        default=DEFAULT_PRICE_PER_UNIT,
        nullable=False,
    )
    pickup_location: Mapped[PickupLocation] = mapped_column(
        Enum(PickupLocation, values_callable=_enum_values, native_enum=False),
        nullable=False,
    )
    status: Mapped[OrderStatus] = mapped_column(
        Enum(OrderStatus, values_callable=_enum_values, native_enum=False),
        default=OrderStatus.PENDING,
        nullable=False,
    )
    
    @property
    def total(self) -> Decimal:
        return self.quantity * self.price_per_unit
    
    def __repr__(self) -> str:
        return f"<Order {self.email} x{self.quantity} {self.status.value}>"
