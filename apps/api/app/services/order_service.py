"""Order lookups for shoppers and the dummy payment callback."""

import logging
import time
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models import order
from app.models.base import document_id, id_candidates, utc_now
from app.models.order import Order, OrderStatus, PaymentStatus

logger = logging.getLogger(__name__)

DUMMY_PAYMENT_CURRENCY = "usd"


def checkout_success_url(order_id: str) -> str:
    """Where the checkout page sends the shopper after payment."""
    return f"/checkout/success?orderId={order_id}"


def build_dummy_payment(amount: float | None) -> dict[str, Any]:
    """A payment-intent-shaped record for the stubbed gateway."""
    created_ms = int(time.time() * 1000)
    return {
        "id": f"pi_dummy_{created_ms}",
        "status": "succeeded",
        "amount_received": amount,
        "currency": DUMMY_PAYMENT_CURRENCY,
        "created": created_ms,
    }


class OrderService:
    """Business logic for order history and payment status updates."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.collection = db[order.COLLECTION]

    async def list_for_user(self, user_id: str) -> list[Order]:
        """Orders placed by ``user_id``, newest first.

        ``userId`` may be stored as an ObjectId or as its string form.
        """
        cursor = self.collection.find({"userId": {"$in": id_candidates(user_id)}}).sort(
            "createdAt", -1
        )
        return [Order.from_mongo(raw) for raw in await cursor.to_list(length=None)]

    async def mark_paid(
        self,
        order_id: str,
        *,
        user_id: str | None = None,
        amount: float | None = None,
    ) -> bool:
        """Record a (dummy) successful payment against an order.

        No signature, ownership, idempotency or amount checks are made: this
        backs the placeholder checkout only.

        Returns:
            Whether an order with ``order_id`` existed.
        """
        payment_info = build_dummy_payment(amount)
        if user_id:
            payment_info["user_id"] = user_id

        result = await self.collection.update_one(
            {"_id": document_id(order_id)},
            {
                "$set": {
                    "status": OrderStatus.PAID.value,
                    "paymentStatus": PaymentStatus.PAID.value,
                    "paymentInfo": payment_info,
                    "updatedAt": utc_now(),
                }
            },
        )

        if result.matched_count == 0:
            logger.warning("Dummy payment for unknown order %s", order_id)
            return False

        logger.info("Order %s marked paid (dummy payment %s)", order_id, payment_info["id"])
        return True
