"""Imeliq database models."""

from imeliq.models.base import Base
from imeliq.models.tester import Tester, SUPPORTED_LOCALES, DEFAULT_LOCALE
from imeliq.models.feedback import Feedback, Feeling
from imeliq.models.order import Order, OrderStatus, PickupLocation, MIN_QUANTITY, MAX_QUANTITY
from imeliq.models.audit import AuditLogEntry, AuditAction

__all__ = [
    "Base",
    "Tester",
    "SUPPORTED_LOCALES",
    "DEFAULT_LOCALE",
    "Feedback",
    "Feeling",
    "Order",
    "OrderStatus",
    "PickupLocation",
    "MIN_QUANTITY",
    "MAX_QUANTITY",
    "AuditLogEntry",
    "AuditAction",
]
