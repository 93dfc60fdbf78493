"""Banner documents: ad banners and announcements share one collection.

Each stored record carries a ``type`` discriminator. In Python the two kinds
are separate models joined in a discriminated union, and per-kind behaviour
(which flag means "active", which field holds the content) is looked up from
``BannerKind`` rather than scattered as string checks.
"""

import enum
from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import Field, TypeAdapter

from app.models.base import MongoModel, from_mongo, utc_now

COLLECTION = "announcements"

HEX_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class BannerKind(str, enum.Enum):
    """Stored ``type`` discriminator values."""

    AD = "adbanner"
    ANNOUNCEMENT = "announcement"

    @property
    def active_field(self) -> str:
        """Document field that switches this kind on."""
        return _ACTIVE_FIELDS[self]

    @property
    def content_field(self) -> str:
        """Document field holding the banner's main content."""
        return _CONTENT_FIELDS[self]


_ACTIVE_FIELDS: dict[BannerKind, str] = {
    BannerKind.AD: "isAdBannerActive",
    BannerKind.ANNOUNCEMENT: "isAnnouncementActive",
}

_CONTENT_FIELDS: dict[BannerKind, str] = {
    BannerKind.AD: "text",
    BannerKind.ANNOUNCEMENT: "image",
}


class BannerLink(MongoModel):
    """Optional call-to-action link."""

    url: str | None = None
    text: str | None = None


class BannerBase(MongoModel):
    """Fields shared by both banner kinds."""

    text: str | None = None
    image: str | None = None
    background_color: str = Field(default="#f59e0b", pattern=HEX_COLOR_PATTERN)
    text_color: str = Field(default="#ffffff", pattern=HEX_COLOR_PATTERN)
    link: BannerLink | None = None
    priority: int = Field(default=1, ge=1, le=10)
    start_date: datetime | None = Field(default_factory=utc_now)
    end_date: datetime | None = None
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class AdBanner(BannerBase):
    """Text strip shown across the top of the storefront."""

    type: Literal["adbanner"] = "adbanner"
    text: str | None = Field(default=None, max_length=200)
    is_ad_banner_active: bool = False


class AnnouncementBanner(BannerBase):
    """Image announcement shown on the storefront home page."""

    type: Literal["announcement"] = "announcement"
    is_announcement_active: bool = False


Banner = Annotated[AdBanner | AnnouncementBanner, Field(discriminator="type")]

_banner_adapter: TypeAdapter[AdBanner | AnnouncementBanner] = TypeAdapter(Banner)

BANNER_MODELS: dict[BannerKind, type[AdBanner] | type[AnnouncementBanner]] = {
    BannerKind.AD: AdBanner,
    BannerKind.ANNOUNCEMENT: AnnouncementBanner,
}


def parse_banner(raw: dict[str, Any]) -> AdBanner | AnnouncementBanner:
    """Validate a raw document into the model for its ``type``."""
    return _banner_adapter.validate_python(from_mongo(raw))
