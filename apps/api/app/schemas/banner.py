"""Pydantic schemas for banner reads and admin writes."""

from datetime import datetime
from typing import Literal

from pydantic import Field

from app.models.banner import HEX_COLOR_PATTERN, AdBanner, AnnouncementBanner, Banner, BannerLink
from app.schemas.common import BaseSchema

# === Read Schemas ===


class BannerPair(BaseSchema):
    """The banner of each kind currently surfaced to shoppers."""

    ad: AdBanner | None = None
    announcement: AnnouncementBanner | None = None


class BannersResponse(BaseSchema):
    banners: BannerPair


class BannerResponse(BaseSchema):
    banner: Banner | None = None


# === Write Schemas ===


class _BannerFields(BaseSchema):
    """Optional fields accepted by every banner write."""

    background_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    priority: int | None = Field(default=None, ge=1, le=10)
    link: BannerLink | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class AdBannerCreate(_BannerFields):
    """Schema for creating an ad banner. ``text`` is checked by the route."""

    text: str | None = Field(default=None, max_length=200)
    text_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    is_ad_banner_active: bool = False


class AnnouncementCreate(_BannerFields):
    """Schema for creating an announcement. ``image`` is checked by the route."""

    image: str | None = None
    is_announcement_active: bool = False


class AdBannerUpdate(_BannerFields):
    """Schema for updating an ad banner; only provided fields are written."""

    id: str | None = None
    text: str | None = Field(default=None, max_length=200)
    text_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    image: str | None = None
    is_ad_banner_active: bool | None = None


class AnnouncementUpdate(_BannerFields):
    """Schema for updating an announcement; only provided fields are written."""

    id: str | None = None
    image: str | None = None
    is_announcement_active: bool | None = None


class BannerPatch(BaseSchema):
    """Dashboard toggle/edit: ``visible`` and ``content`` map onto the kind's fields."""

    type: Literal["ad", "announcement"]
    visible: bool | None = None
    content: str | None = None
    background_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
    text_color: str | None = Field(default=None, pattern=HEX_COLOR_PATTERN)
