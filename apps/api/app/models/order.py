"""Order documents."""

import enum
from datetime import datetime
from typing import Any

from pydantic import ConfigDict
from pydantic.alias_generators import to_camel

from app.models.base import MongoModel

COLLECTION = "orders"


class OrderStatus(str, enum.Enum):
    """Order lifecycle values written by checkout, payment and admin screens."""

    PENDING = "pending"
    PAID = "paid"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"
    REFUNDED = "refunded"


class PaymentStatus(str, enum.Enum):
    """Payment state tracked separately from fulfilment."""

    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class Order(MongoModel):
    """An order as stored by checkout.

    Only the fields this service reads are typed; line items, addresses,
    timeline and the rest of the checkout payload pass through untouched.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    order_number: str | None = None
    user_id: str | None = None
    status: str = OrderStatus.PENDING.value
    payment_status: str = PaymentStatus.PENDING.value
    total: float = 0
    currency: str = "INR"
    payment_info: dict[str, Any] | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
