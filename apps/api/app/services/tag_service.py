"""Tag facets (aggregation over published products) and tag discounts."""

import logging
from typing import Any

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from app.models import product, tag_discount
from app.models.base import utc_now
from app.models.tag_discount import TagDiscount, normalize_tag
from app.schemas.tag import TagCount

logger = logging.getLogger(__name__)

# One row per (published product, tag), grouped and counted per tag.
# Equal counts are ordered by tag value so the facet list is stable.
TAG_COUNT_PIPELINE: list[dict[str, Any]] = [
    {"$match": {"published": True}},
    {"$unwind": "$tags"},
    {"$group": {"_id": "$tags", "count": {"$sum": 1}}},
    {"$sort": {"count": -1, "_id": 1}},
]


def tag_display_name(tag: str) -> str:
    """Capitalise the first character only: ``"festive"`` -> ``"Festive"``."""
    return tag[:1].upper() + tag[1:]


class TagService:
    """Read-side tag statistics for storefront filters."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.products = db[product.COLLECTION]

    async def tag_counts(self) -> list[TagCount]:
        """Tag usage across published products, most used first."""
        rows = await self.products.aggregate(TAG_COUNT_PIPELINE).to_list(length=None)

        return [
            TagCount(id=row["_id"], name=tag_display_name(row["_id"]), count=row["count"])
            for row in rows
            if isinstance(row.get("_id"), str)
        ]


class TagDiscountService:
    """Admin-managed percentage discounts keyed by normalised tag."""

    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.collection = db[tag_discount.COLLECTION]

    async def list_discounts(self) -> list[TagDiscount]:
        """All discounts, newest first."""
        cursor = self.collection.find({}).sort("createdAt", -1)
        return [TagDiscount.from_mongo(raw) for raw in await cursor.to_list(length=None)]

    async def upsert(
        self,
        tag: str,
        percent: float,
        *,
        active: bool = True,
        created_by: str | None = None,
    ) -> TagDiscount:
        """Create or replace the discount for ``tag``."""
        key = normalize_tag(tag)
        now = utc_now()
        raw = await self.collection.find_one_and_update(
            {"tag": key},
            {
                "$set": {
                    "tag": key,
                    "percent": percent,
                    "active": active,
                    "createdBy": created_by,
                    "updatedAt": now,
                },
                "$setOnInsert": {"createdAt": now},
            },
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        logger.info("Saved tag discount %s=%s%% (active=%s)", key, percent, active)
        return TagDiscount.from_mongo(raw)

    async def delete(self, tag: str) -> bool:
        """Remove the discount for ``tag``. Returns whether one existed."""
        raw = await self.collection.find_one_and_delete({"tag": normalize_tag(tag)})
        return raw is not None
