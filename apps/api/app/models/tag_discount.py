"""Per-tag percentage discounts managed from the admin dashboard."""

from datetime import datetime

from pydantic import Field

from app.models.base import MongoModel

COLLECTION = "tagdiscounts"


def normalize_tag(tag: str) -> str:
    """Tags are keyed lowercased and trimmed."""
    return tag.strip().lower()


class TagDiscount(MongoModel):
    tag: str
    percent: float = Field(ge=0, le=100)
    active: bool = True
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None
