"""Pytest configuration and fixtures for the Storefront API test suite.

Provides:
- In-memory MongoDB (mongomock-motor)
- Mock authentication (session bypass) for shopper and admin users
- Disabled rate limiting
- Document factory fixtures for Product, Order, Banner and User
"""

import uuid
from collections.abc import AsyncGenerator, Callable
from datetime import datetime, timedelta
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from app.core.auth import get_current_user
from app.core.database import MongoDatabase
from app.core.deps import get_database
from app.core.rate_limit import limiter
from app.main import app
from app.models import banner, order, product
from app.models.base import utc_now

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------
TEST_USER_ID = "665f1c2b9d3e4a0012345678"
TEST_USER_EMAIL = "shopper@example.com"
TEST_ADMIN_ID = "665f1c2b9d3e4a0087654321"
TEST_DB_NAME = "storefront_test"

# ---------------------------------------------------------------------------
# Disable rate limiting globally for tests
# ---------------------------------------------------------------------------
limiter.enabled = False


# ---------------------------------------------------------------------------
# Database fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def mongo_client() -> AsyncMongoMockClient:
    """Provide a fresh in-memory Mongo client per test."""
    return AsyncMongoMockClient()


@pytest.fixture
def mongo(mongo_client: AsyncMongoMockClient) -> MongoDatabase:
    """A connected MongoDatabase handle over the in-memory client."""
    return MongoDatabase.from_client(mongo_client, TEST_DB_NAME)


@pytest.fixture
def db(mongo: MongoDatabase) -> Any:
    """The application database used by services under test."""
    return mongo.db


# ---------------------------------------------------------------------------
# Auth mock
# ---------------------------------------------------------------------------


@pytest.fixture
def auth_user() -> dict[str, Any]:
    """Return the default signed-in shopper payload (mimics a decoded session)."""
    return {
        "sub": TEST_USER_ID,
        "id": TEST_USER_ID,
        "email": TEST_USER_EMAIL,
        "role": "user",
    }


@pytest.fixture
def admin_user() -> dict[str, Any]:
    return {
        "sub": TEST_ADMIN_ID,
        "id": TEST_ADMIN_ID,
        "email": "admin@example.com",
        "role": "admin",
    }


# ---------------------------------------------------------------------------
# Clients
# ---------------------------------------------------------------------------


async def _client_with_overrides(
    mongo: MongoDatabase,
    user: dict[str, Any] | None,
) -> AsyncGenerator[AsyncClient, None]:
    app.dependency_overrides[get_database] = lambda: mongo

    if user is not None:

        async def _override_user() -> dict[str, Any]:
            return user

        app.dependency_overrides[get_current_user] = _override_user

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(
    mongo: MongoDatabase,
    auth_user: dict[str, Any],
) -> AsyncGenerator[AsyncClient, None]:
    """Client signed in as a shopper, backed by the in-memory database."""
    async for ac in _client_with_overrides(mongo, auth_user):
        yield ac


@pytest_asyncio.fixture
async def admin_client(
    mongo: MongoDatabase,
    admin_user: dict[str, Any],
) -> AsyncGenerator[AsyncClient, None]:
    """Client signed in as an admin, backed by the in-memory database."""
    async for ac in _client_with_overrides(mongo, admin_user):
        yield ac


@pytest_asyncio.fixture
async def unauthed_client(mongo: MongoDatabase) -> AsyncGenerator[AsyncClient, None]:
    """Unauthenticated client. Auth is NOT overridden."""
    async for ac in _client_with_overrides(mongo, None):
        yield ac


@pytest_asyncio.fixture
async def plain_client() -> AsyncGenerator[AsyncClient, None]:
    """Minimal async test client with NO dependency overrides."""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac


# ---------------------------------------------------------------------------
# Document Factories
# ---------------------------------------------------------------------------


@pytest.fixture
def product_factory(db: Any) -> Callable[..., Any]:
    """Factory that inserts product documents."""

    async def _create(
        *,
        name: str = "Test Product",
        published: bool = True,
        tags: list[str] | None = None,
        price: float = 1000,
    ) -> dict[str, Any]:
        document = {
            "name": name,
            "slug": f"test-product-{uuid.uuid4().hex[:8]}",
            "price": price,
            "published": published,
            "tags": tags or [],
            "createdAt": utc_now(),
        }
        result = await db[product.COLLECTION].insert_one(document)
        document["_id"] = result.inserted_id
        return document

    return _create


@pytest.fixture
def order_factory(db: Any) -> Callable[..., Any]:
    """Factory that inserts order documents."""

    async def _create(
        *,
        order_id: Any = None,
        user_id: Any = TEST_USER_ID,
        status: str = "pending",
        payment_status: str = "pending",
        total: float = 2500,
        created_at: datetime | None = None,
    ) -> dict[str, Any]:
        document: dict[str, Any] = {
            "orderNumber": f"NV{uuid.uuid4().hex[:8].upper()}",
            "userId": user_id,
            "items": [{"name": "Silk Clutch", "price": total, "quantity": 1}],
            "total": total,
            "currency": "INR",
            "status": status,
            "paymentStatus": payment_status,
            "createdAt": created_at or utc_now(),
        }
        if order_id is not None:
            document["_id"] = order_id
        result = await db[order.COLLECTION].insert_one(document)
        document["_id"] = result.inserted_id
        return document

    return _create


@pytest.fixture
def banner_factory(db: Any) -> Callable[..., Any]:
    """Factory that inserts banner documents of either kind."""

    async def _create(
        *,
        kind: str = "adbanner",
        active: bool = True,
        text: str = "Festive sale: 20% off",
        image: str = "https://cdn.example.com/banner.jpg",
        priority: int = 1,
        start_date: datetime | None = None,
        end_date: datetime | None = None,
        created_at: datetime | None = None,
    ) -> dict[str, Any]:
        now = utc_now()
        document: dict[str, Any] = {
            "type": kind,
            "backgroundColor": "#f59e0b",
            "textColor": "#ffffff",
            "priority": priority,
            "startDate": start_date or now - timedelta(days=1),
            "createdBy": TEST_ADMIN_ID,
            "createdAt": created_at or now,
            "updatedAt": created_at or now,
        }
        if kind == "adbanner":
            document["text"] = text
            document["isAdBannerActive"] = active
        else:
            document["image"] = image
            document["isAnnouncementActive"] = active
        if end_date is not None:
            document["endDate"] = end_date

        result = await db[banner.COLLECTION].insert_one(document)
        document["_id"] = result.inserted_id
        return document

    return _create


@pytest.fixture
def user_factory(db: Any) -> Callable[..., Any]:
    async def _create(*, email: str | None = None) -> dict[str, Any]:
        document = {"email": email or f"{uuid.uuid4().hex[:8]}@example.com"}
        result = await db["users"].insert_one(document)
        document["_id"] = result.inserted_id
        return document

    return _create
