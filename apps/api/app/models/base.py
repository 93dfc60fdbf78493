"""Base document model and helpers shared by all MongoDB collections."""

from datetime import UTC, datetime
from typing import Any, Self

from bson import ObjectId
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utc_now() -> datetime:
    """Current time as naive UTC, the form the driver stores and returns."""
    return datetime.now(UTC).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Normalise an aware datetime to naive UTC; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def document_id(value: str) -> ObjectId | str:
    """Match 24-hex ids as ObjectId and anything else as a raw ``_id`` value."""
    return ObjectId(value) if ObjectId.is_valid(value) else value


def id_candidates(value: str) -> list[ObjectId | str]:
    """Both encodings of a reference id, for fields written either way."""
    if ObjectId.is_valid(value):
        return [ObjectId(value), value]
    return [value]


def from_mongo(raw: Any) -> Any:
    """Convert a raw driver document into plain JSON-friendly Python values.

    ``_id`` is renamed to ``id`` at the top level and every ObjectId is
    rendered as its hex string. Datetimes are left for the serializer.
    """
    if isinstance(raw, ObjectId):
        return str(raw)
    if isinstance(raw, list):
        return [from_mongo(item) for item in raw]
    if isinstance(raw, dict):
        converted = {key: from_mongo(value) for key, value in raw.items() if key != "__v"}
        if "_id" in converted:
            converted["id"] = converted.pop("_id")
        return converted
    return raw


class MongoModel(BaseModel):
    """Base class for documents: snake_case in Python, camelCase in Mongo/JSON."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str | None = None

    @classmethod
    def from_mongo(cls, raw: dict[str, Any]) -> Self:
        """Build a model from a raw driver document."""
        return cls.model_validate(from_mongo(raw))

    def to_mongo(self) -> dict[str, Any]:
        """Dump to a document for insertion (no id, no unset optionals)."""
        return self.model_dump(by_alias=True, exclude_none=True, exclude={"id"})
