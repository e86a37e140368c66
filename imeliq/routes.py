from imeliq.api import (
    AdminController,
    AdminAuthController,
    FeedbackController,
    OrderController,
    RegisterController,
)

ROUTES = [
    RegisterController,
    FeedbackController,
    OrderController,
    AdminAuthController,
    AdminController,
]
