"""Pydantic schemas for tag facets and tag discounts."""

from pydantic import Field

from app.models.tag_discount import TagDiscount
from app.schemas.common import BaseSchema


class TagCount(BaseSchema):
    """How many published products carry a tag."""

    id: str = Field(..., description="Raw tag value")
    name: str = Field(..., description="Display name (first letter capitalised)")
    count: int


class TagsResponse(BaseSchema):
    tags: list[TagCount]


class TagDiscountCreate(BaseSchema):
    """Schema for upserting a tag discount. Required fields are checked by the route."""

    tag: str | None = None
    percent: float | None = Field(default=None, ge=0, le=100)
    active: bool = True


class TagDiscountResponse(BaseSchema):
    discount: TagDiscount


class TagDiscountListResponse(BaseSchema):
    discounts: list[TagDiscount]
