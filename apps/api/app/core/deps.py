"""Dependency injection for FastAPI routes."""

import logging
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import ConnectionFailure

# Re-export auth dependencies for convenience
from app.core.auth import (
    AdminUser,
    CurrentUser,
    get_admin_user,
    get_current_user,
)
from app.core.database import MongoDatabase

logger = logging.getLogger(__name__)


def get_database(request: Request) -> MongoDatabase:
    """Return the MongoDatabase handle owned by the application."""
    database: MongoDatabase = request.app.state.mongo
    return database


async def get_db(
    database: MongoDatabase = Depends(get_database),
) -> AsyncIOMotorDatabase:
    """Yield the application database, or 500 if the handle was never connected."""
    try:
        return database.db
    except ConnectionFailure:
        logger.error("Database handle requested before connect()")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database unavailable",
        )


# Type aliases for database dependencies
DatabaseHandle = Annotated[MongoDatabase, Depends(get_database)]
DB = Annotated[AsyncIOMotorDatabase, Depends(get_db)]


__all__ = [
    "DB",
    "AdminUser",
    "CurrentUser",
    "DatabaseHandle",
    "get_admin_user",
    "get_current_user",
    "get_database",
    "get_db",
]
