"""Imeliq API routes."""

from imeliq.api.admin import AdminController
from imeliq.api.admin_auth import AdminAuthController
from imeliq.api.feedback import FeedbackController
from imeliq.api.order import OrderController
from imeliq.api.register import RegisterController

__all__ = [
    "AdminController",
    "AdminAuthController",
    "FeedbackController",
    "OrderController",
    "RegisterController",
]
