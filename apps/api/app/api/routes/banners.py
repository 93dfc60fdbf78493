"""Banner endpoints: storefront resolution and dashboard toggles."""

import logging

from fastapi import APIRouter, HTTPException, Query, Request, status
from pymongo.errors import PyMongoError

from app.core.deps import DB, AdminUser
from app.core.rate_limit import ADMIN_WRITE_RATE_LIMIT, limiter
from app.models.banner import BannerKind
from app.schemas.banner import BannerPatch, BannerResponse, BannersResponse
from app.services.banner_service import BannerService

logger = logging.getLogger(__name__)

router = APIRouter()

# Dashboard names for the two kinds
_PATCH_KINDS = {
    "ad": BannerKind.AD,
    "announcement": BannerKind.ANNOUNCEMENT,
}


@router.get(
    "",
    response_model=BannersResponse,
    summary="Get active banners",
    description="The ad banner and announcement currently shown on the storefront.",
)
async def get_banners(
    db: DB,
    include_inactive: bool = Query(
        False, description="Fall back to the latest banner of a kind when none is active"
    ),
) -> BannersResponse:
    """Resolve the ad banner and announcement; a missing kind is null."""
    try:
        banners = await BannerService(db).resolve(include_inactive=include_inactive)
    except PyMongoError as exc:
        logger.exception("Failed to resolve banners")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch banners",
        ) from exc

    return BannersResponse(banners=banners)


@router.patch(
    "/{banner_id}",
    response_model=BannerResponse,
    summary="Toggle or edit a banner",
)
@limiter.limit(ADMIN_WRITE_RATE_LIMIT)
async def patch_banner(
    request: Request,  # noqa: ARG001 — required by slowapi
    banner_id: str,
    data: BannerPatch,
    db: DB,
    _admin: AdminUser,
) -> BannerResponse:
    """Show/hide a banner or replace its content (text for ads, image for announcements)."""
    style = data.model_dump(
        by_alias=True,
        exclude_none=True,
        include={"background_color", "text_color"},
    )

    try:
        banner = await BannerService(db).set_visibility_and_content(
            banner_id,
            _PATCH_KINDS[data.type],
            visible=data.visible,
            content=data.content,
            style=style,
        )
    except PyMongoError as exc:
        logger.exception("Failed to update banner %s", banner_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update banner",
        ) from exc

    if banner is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Banner not found")
    return BannerResponse(banner=banner)
