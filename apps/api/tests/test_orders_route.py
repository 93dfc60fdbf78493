"""Tests for order history and the dummy payment callback.

Covers:
- GET /api/orders/user: auth, ownership filter, ordering, id encodings
- POST /api/payment: status update, redirect, unknown orders, driver errors
- Helper functions in order_service
"""

from collections.abc import Callable
from datetime import timedelta
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

from bson import ObjectId
from httpx import AsyncClient
from pymongo.errors import NetworkTimeout

from app.models.base import utc_now
from app.models.order import COLLECTION
from app.services.order_service import (
    OrderService,
    build_dummy_payment,
    checkout_success_url,
)

TEST_USER_ID = "665f1c2b9d3e4a0012345678"


class TestListUserOrders:
    """Tests for GET /api/orders/user."""

    async def test_requires_session(self, unauthed_client: AsyncClient) -> None:
        """No session → 401 and the documented error body."""
        response = await unauthed_client.get("/api/orders/user")

        assert response.status_code == 401
        assert response.json() == {"error": "Unauthorized"}

    async def test_returns_only_own_orders_newest_first(
        self, client: AsyncClient, order_factory: Callable[..., Any]
    ) -> None:
        now = utc_now()
        older = await order_factory(created_at=now - timedelta(days=3))
        newer = await order_factory(created_at=now)
        await order_factory(user_id="someone-else")

        response = await client.get("/api/orders/user")

        assert response.status_code == 200
        orders = response.json()["orders"]
        assert [o["id"] for o in orders] == [str(newer["_id"]), str(older["_id"])]
        assert orders[0]["orderNumber"] == newer["orderNumber"]
        assert orders[0]["items"][0]["name"] == "Silk Clutch"

    async def test_matches_object_id_user_reference(
        self, client: AsyncClient, order_factory: Callable[..., Any]
    ) -> None:
        """Orders whose userId was stored as an ObjectId are still found."""
        await order_factory(user_id=ObjectId(TEST_USER_ID))

        response = await client.get("/api/orders/user")

        orders = response.json()["orders"]
        assert len(orders) == 1
        assert orders[0]["userId"] == TEST_USER_ID

    async def test_no_orders(self, client: AsyncClient) -> None:
        response = await client.get("/api/orders/user")
        assert response.status_code == 200
        assert response.json() == {"orders": []}


class TestPayment:
    """Tests for POST /api/payment."""

    async def test_marks_order_paid_and_redirects(
        self,
        unauthed_client: AsyncClient,
        order_factory: Callable[..., Any],
        db: Any,
    ) -> None:
        await order_factory(order_id="ord123", user_id="user_1", total=2500)

        response = await unauthed_client.post(
            "/api/payment",
            json={"orderId": "ord123", "userId": "user_1", "amount": 2500},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["redirectUrl"] == "/checkout/success?orderId=ord123"

        stored = await db[COLLECTION].find_one({"_id": "ord123"})
        assert stored["status"] == "paid"
        assert stored["paymentStatus"] == "paid"
        assert stored["paymentInfo"]["status"] == "succeeded"
        assert stored["paymentInfo"]["amount_received"] == 2500
        assert stored["updatedAt"] is not None

    async def test_object_id_orders(
        self,
        unauthed_client: AsyncClient,
        order_factory: Callable[..., Any],
        db: Any,
    ) -> None:
        order = await order_factory()

        response = await unauthed_client.post(
            "/api/payment", json={"orderId": str(order["_id"]), "amount": 10}
        )

        assert response.status_code == 200
        stored = await db[COLLECTION].find_one({"_id": order["_id"]})
        assert stored["status"] == "paid"

    async def test_unknown_order_still_redirects(self, unauthed_client: AsyncClient) -> None:
        response = await unauthed_client.post("/api/payment", json={"orderId": "missing"})

        assert response.status_code == 200
        assert response.json()["redirectUrl"] == "/checkout/success?orderId=missing"

    async def test_missing_order_id_rejected(self, unauthed_client: AsyncClient) -> None:
        response = await unauthed_client.post("/api/payment", json={"amount": 100})
        assert response.status_code == 422

    async def test_database_error_returns_500(self, unauthed_client: AsyncClient) -> None:
        with patch("app.api.routes.payment.OrderService") as mock_service_cls:
            mock_service = AsyncMock()
            mock_service.mark_paid.side_effect = NetworkTimeout("timed out")
            mock_service_cls.return_value = mock_service

            response = await unauthed_client.post("/api/payment", json={"orderId": "ord123"})

        assert response.status_code == 500
        assert response.json() == {"success": False, "message": "Dummy payment failed"}


class TestOrderServiceHelpers:
    def test_checkout_success_url(self) -> None:
        assert checkout_success_url("ord123") == "/checkout/success?orderId=ord123"

    def test_build_dummy_payment(self) -> None:
        payment = build_dummy_payment(2500)

        assert payment["id"].startswith("pi_dummy_")
        assert payment["status"] == "succeeded"
        assert payment["amount_received"] == 2500
        assert payment["currency"] == "usd"

    async def test_mark_paid_reports_missing_order(self) -> None:
        collection = MagicMock()
        collection.update_one = AsyncMock(return_value=MagicMock(matched_count=0))
        db = MagicMock()
        db.__getitem__.return_value = collection

        assert await OrderService(db).mark_paid("ord404") is False

        query, update = collection.update_one.call_args.args
        assert query == {"_id": "ord404"}
        assert update["$set"]["status"] == "paid"
        assert "user_id" not in update["$set"]["paymentInfo"]
