"""Banner resolution and admin updates over the announcements collection."""

import logging
from datetime import datetime
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from app.models.banner import (
    BANNER_MODELS,
    COLLECTION,
    AdBanner,
    AnnouncementBanner,
    BannerKind,
    parse_banner,
)
from app.models.base import document_id, to_naive_utc, utc_now
from app.schemas.banner import BannerPair

logger = logging.getLogger(__name__)

# Highest priority first, then the most recently created
BANNER_SORT = [("priority", -1), ("createdAt", -1)]


def live_banner_filter(kind: BannerKind, now: datetime) -> dict[str, Any]:
    """Query for active banners of ``kind`` whose date window contains ``now``.

    A missing ``startDate`` or ``endDate`` leaves that side of the window open.
    """
    return {
        "type": kind.value,
        kind.active_field: True,
        "$and": [
            {"$or": [{"startDate": {"$lte": now}}, {"startDate": {"$exists": False}}]},
            {"$or": [{"endDate": {"$gte": now}}, {"endDate": {"$exists": False}}]},
        ],
    }


def _normalize_update(fields: dict[str, Any]) -> dict[str, Any]:
    """Store datetimes as naive UTC like every other timestamp."""
    return {
        key: to_naive_utc(value) if isinstance(value, datetime) else value
        for key, value in fields.items()
    }


class BannerService:
    """Reads and writes ad banners and announcements."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.collection = db[COLLECTION]

    async def find_active(self, kind: BannerKind) -> AdBanner | AnnouncementBanner | None:
        """The active, in-window banner of ``kind`` that should be shown, if any."""
        raw = await self.collection.find_one(
            live_banner_filter(kind, utc_now()),
            sort=BANNER_SORT,
        )
        return parse_banner(raw) if raw else None

    async def find_latest(self, kind: BannerKind) -> AdBanner | AnnouncementBanner | None:
        """The most recently created banner of ``kind`` regardless of state."""
        raw = await self.collection.find_one(
            {"type": kind.value},
            sort=[("createdAt", -1)],
        )
        return parse_banner(raw) if raw else None

    async def resolve(self, *, include_inactive: bool = False) -> BannerPair:
        """Resolve the ad banner and announcement to surface.

        Args:
            include_inactive: Fall back to the latest record of a kind when
                none is active, so dashboard editors always have one to edit.
        """
        found: dict[BannerKind, AdBanner | AnnouncementBanner | None] = {}
        for kind in BannerKind:
            banner = await self.find_active(kind)
            if banner is None and include_inactive:
                banner = await self.find_latest(kind)
            found[kind] = banner

        return BannerPair(
            ad=found[BannerKind.AD],
            announcement=found[BannerKind.ANNOUNCEMENT],
        )

    async def create(
        self,
        kind: BannerKind,
        fields: dict[str, Any],
        created_by: str,
    ) -> AdBanner | AnnouncementBanner:
        """Insert a banner of ``kind`` built from schema field values."""
        model = BANNER_MODELS[kind].model_validate(
            {**_normalize_update(fields), "created_by": created_by}
        )
        now = utc_now()
        document = {**model.to_mongo(), "createdAt": now, "updatedAt": now}

        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("Created %s banner %s", kind.value, result.inserted_id)
        return parse_banner(document)

    async def update(
        self,
        banner_id: str,
        kind: BannerKind,
        fields: dict[str, Any],
    ) -> AdBanner | AnnouncementBanner | None:
        """Set the given camelCase document fields on a banner of ``kind``.

        Returns:
            The updated banner, or None when no banner of that kind has the id.
        """
        raw = await self.collection.find_one_and_update(
            {"_id": document_id(banner_id), "type": kind.value},
            {"$set": {**_normalize_update(fields), "updatedAt": utc_now()}},
            return_document=ReturnDocument.AFTER,
        )
        if raw is None:
            return None
        logger.info("Updated %s banner %s: %s", kind.value, banner_id, sorted(fields))
        return parse_banner(raw)

    async def set_visibility_and_content(
        self,
        banner_id: str,
        kind: BannerKind,
        *,
        visible: bool | None = None,
        content: str | None = None,
        style: dict[str, str] | None = None,
    ) -> AdBanner | AnnouncementBanner | None:
        """Dashboard toggle: map ``visible``/``content`` onto the kind's own fields."""
        fields: dict[str, Any] = dict(style or {})
        if visible is not None:
            fields[kind.active_field] = visible
        if content is not None:
            fields[kind.content_field] = content
        return await self.update(banner_id, kind, fields)
