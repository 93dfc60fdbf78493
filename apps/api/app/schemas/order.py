"""Pydantic schemas for order reads and the payment callback."""

from pydantic import Field

from app.models.order import Order
from app.schemas.common import BaseSchema


class UserOrdersResponse(BaseSchema):
    """The signed-in user's orders, newest first."""

    orders: list[Order]


class PaymentRequest(BaseSchema):
    """Payment callback body sent by the checkout page."""

    order_id: str = Field(..., min_length=1, description="Order to mark as paid")
    user_id: str | None = Field(default=None, description="Paying user (not verified)")
    amount: float | None = Field(default=None, description="Charged amount (not reconciled)")


class PaymentResponse(BaseSchema):
    success: bool
    message: str
    redirect_url: str | None = None
