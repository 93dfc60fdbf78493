"""Tests for the MongoDatabase handle lifecycle and the document helpers."""

from datetime import UTC, datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from bson import ObjectId
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from app.core.database import MongoDatabase, ReadyState
from app.main import app, lifespan
from app.models.base import document_id, from_mongo, id_candidates, to_naive_utc


def _mock_client(ping: AsyncMock | None = None) -> MagicMock:
    client = MagicMock()
    client.admin.command = ping or AsyncMock(return_value={"ok": 1.0})
    return client


class TestMongoDatabase:
    def test_new_handle_is_disconnected(self) -> None:
        database = MongoDatabase("mongodb://localhost:27017", "storefront")

        assert database.ready_state is ReadyState.DISCONNECTED
        with pytest.raises(ConnectionFailure):
            _ = database.db

    async def test_probe_without_client_skips_network(self) -> None:
        database = MongoDatabase("mongodb://localhost:27017", "storefront")
        assert await database.probe() is ReadyState.DISCONNECTED

    async def test_connect_pings_and_marks_connected(self) -> None:
        client = _mock_client()
        database = MongoDatabase("mongodb://db:27017", "storefront", timeout_ms=1500)

        with patch("app.core.database.AsyncIOMotorClient", return_value=client) as client_cls:
            await database.connect()

        client_cls.assert_called_once_with("mongodb://db:27017", serverSelectionTimeoutMS=1500)
        client.admin.command.assert_awaited_once_with("ping")
        assert database.ready_state is ReadyState.CONNECTED
        assert database.db is client["storefront"]

    async def test_connect_failure_leaves_disconnected(self) -> None:
        client = _mock_client(AsyncMock(side_effect=ServerSelectionTimeoutError("no servers")))
        database = MongoDatabase("mongodb://db:27017", "storefront")

        with (
            patch("app.core.database.AsyncIOMotorClient", return_value=client),
            pytest.raises(ServerSelectionTimeoutError),
        ):
            await database.connect()

        assert database.ready_state is ReadyState.DISCONNECTED

    async def test_probe_recovers_after_failed_connect(self) -> None:
        ping = AsyncMock(side_effect=[ServerSelectionTimeoutError("down"), {"ok": 1.0}])
        database = MongoDatabase("mongodb://db:27017", "storefront")

        with patch("app.core.database.AsyncIOMotorClient", return_value=_mock_client(ping)):
            with pytest.raises(ServerSelectionTimeoutError):
                await database.connect()

        assert await database.probe() is ReadyState.CONNECTED

    async def test_probe_failure_marks_disconnected(self) -> None:
        ping = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))
        database = MongoDatabase.from_client(_mock_client(ping), "storefront")

        with pytest.raises(ServerSelectionTimeoutError):
            await database.probe()

        assert database.ready_state is ReadyState.DISCONNECTED

    async def test_close(self) -> None:
        client = _mock_client()
        database = MongoDatabase.from_client(client, "storefront")

        await database.close()

        client.close.assert_called_once()
        assert database.ready_state is ReadyState.DISCONNECTED
        with pytest.raises(ConnectionFailure):
            _ = database.db

    def test_ready_state_numbers(self) -> None:
        assert [int(state) for state in ReadyState] == [0, 1, 2, 3]

    async def test_lifespan_keeps_serving_when_database_is_down(self) -> None:
        """A failed startup connect is logged; shutdown still closes the handle."""
        database = app.state.mongo
        connect = AsyncMock(side_effect=ServerSelectionTimeoutError("down"))
        close = AsyncMock()

        with patch.object(database, "connect", connect), patch.object(database, "close", close):
            async with lifespan(app):
                connect.assert_awaited_once()
                close.assert_not_awaited()

        close.assert_awaited_once()


class TestDocumentHelpers:
    def test_document_id(self) -> None:
        oid = ObjectId()
        assert document_id(str(oid)) == oid
        assert document_id("ord123") == "ord123"

    def test_id_candidates(self) -> None:
        oid = ObjectId()
        assert id_candidates(str(oid)) == [oid, str(oid)]
        assert id_candidates("user_1") == ["user_1"]

    def test_from_mongo_renames_and_stringifies(self) -> None:
        oid, ref = ObjectId(), ObjectId()
        raw = {"_id": oid, "userId": ref, "items": [{"productId": ref}], "__v": 0}

        assert from_mongo(raw) == {
            "id": str(oid),
            "userId": str(ref),
            "items": [{"productId": str(ref)}],
        }

    def test_to_naive_utc(self) -> None:
        ist = timezone(timedelta(hours=5, minutes=30))
        assert to_naive_utc(datetime(2025, 1, 1, 11, 0, tzinfo=ist)) == datetime(2025, 1, 1, 5, 30)
        assert to_naive_utc(datetime(2025, 1, 1, tzinfo=UTC)) == datetime(2025, 1, 1)
        assert to_naive_utc(datetime(2025, 1, 1)) == datetime(2025, 1, 1)
