"""MongoDB connection handle with an explicit connect/close lifecycle.

The application builds one ``MongoDatabase`` in ``create_app``, connects it
in the lifespan and closes it on shutdown. Route handlers receive it through
the ``get_database`` dependency instead of reaching for a module global.
"""

import logging
from enum import IntEnum
from typing import Any

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure, PyMongoError

logger = logging.getLogger(__name__)


class ReadyState(IntEnum):
    """Connectivity status of the handle, numbered like driver ready-states."""

    DISCONNECTED = 0
    CONNECTED = 1
    CONNECTING = 2
    DISCONNECTING = 3


class MongoDatabase:
    """Owns the async Mongo client and tracks its ready-state."""

    def __init__(self, uri: str, name: str, *, timeout_ms: int = 5000) -> None:
        self.uri = uri
        self.name = name
        self.timeout_ms = timeout_ms
        self._client: Any = None
        self._state = ReadyState.DISCONNECTED

    @classmethod
    def from_client(cls, client: Any, name: str) -> "MongoDatabase":
        """Wrap an already-constructed client (used by tests and scripts)."""
        database = cls(uri="", name=name)
        database._client = client
        database._state = ReadyState.CONNECTED
        return database

    @property
    def ready_state(self) -> ReadyState:
        return self._state

    @property
    def db(self) -> AsyncIOMotorDatabase:
        """The application database.

        Raises:
            ConnectionFailure: If ``connect()`` has not been called.
        """
        if self._client is None:
            raise ConnectionFailure("MongoDB client is not connected")
        return self._client[self.name]

    async def connect(self) -> None:
        """Create the client and confirm the server answers a ping.

        The client object is kept even when the ping fails so the driver can
        recover on its own; the ready-state stays DISCONNECTED until a later
        ``probe()`` succeeds.
        """
        if self._client is not None and self._state is ReadyState.CONNECTED:
            return

        self._state = ReadyState.CONNECTING
        if self._client is None:
            self._client = AsyncIOMotorClient(
                self.uri,
                serverSelectionTimeoutMS=self.timeout_ms,
            )

        try:
            await self._client.admin.command("ping")
        except PyMongoError:
            self._state = ReadyState.DISCONNECTED
            raise

        self._state = ReadyState.CONNECTED
        logger.info("Connected to MongoDB database %s", self.name)

    async def close(self) -> None:
        """Close the client and release its connection pool."""
        if self._client is None:
            return

        self._state = ReadyState.DISCONNECTING
        self._client.close()
        self._client = None
        self._state = ReadyState.DISCONNECTED
        logger.info("MongoDB connection closed")

    async def probe(self) -> ReadyState:
        """Ping the server and return the resulting ready-state.

        Transitional states and a missing client are reported as-is without
        touching the network.

        Raises:
            PyMongoError: If the ping fails. The state is set to DISCONNECTED.
        """
        if self._client is None or self._state in (
            ReadyState.CONNECTING,
            ReadyState.DISCONNECTING,
        ):
            return self._state

        try:
            await self._client.admin.command("ping")
        except PyMongoError:
            self._state = ReadyState.DISCONNECTED
            raise

        self._state = ReadyState.CONNECTED
        return self._state
