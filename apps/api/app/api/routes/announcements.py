"""Per-kind banner endpoints used by the storefront and the banner editor."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException, Request, status
from pymongo.errors import PyMongoError

from app.core.auth import session_user_id
from app.core.deps import DB, AdminUser
from app.core.rate_limit import ADMIN_WRITE_RATE_LIMIT, limiter
from app.models.banner import BannerKind
from app.schemas.banner import (
    AdBannerCreate,
    AdBannerUpdate,
    AnnouncementCreate,
    AnnouncementUpdate,
    BannerResponse,
)
from app.services.banner_service import BannerService

logger = logging.getLogger(__name__)

router = APIRouter()


# === Helpers ===


def _db_error(action: str) -> HTTPException:
    logger.exception("Banner %s failed", action)
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Failed to {action} banner",
    )


async def _create(
    db: DB,
    kind: BannerKind,
    data: AdBannerCreate | AnnouncementCreate,
    admin: dict[str, Any],
) -> BannerResponse:
    try:
        banner = await BannerService(db).create(
            kind,
            data.model_dump(exclude_none=True),
            created_by=session_user_id(admin),
        )
    except PyMongoError as exc:
        raise _db_error("create") from exc
    return BannerResponse(banner=banner)


async def _update(
    db: DB,
    kind: BannerKind,
    data: AdBannerUpdate | AnnouncementUpdate,
) -> BannerResponse:
    banner_id = data.id
    if not banner_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing id")

    fields = data.model_dump(by_alias=True, exclude_none=True, exclude={"id"})
    try:
        banner = await BannerService(db).update(banner_id, kind, fields)
    except PyMongoError as exc:
        raise _db_error("update") from exc

    if banner is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Banner not found")
    return BannerResponse(banner=banner)


# === Ad banner ===


@router.get("/adbanner", response_model=BannerResponse, summary="Get the active ad banner")
async def get_ad_banner(db: DB) -> BannerResponse:
    """The live ad banner, or null when none is active."""
    try:
        banner = await BannerService(db).find_active(BannerKind.AD)
    except PyMongoError as exc:
        raise _db_error("fetch") from exc
    return BannerResponse(banner=banner)


@router.post(
    "/adbanner",
    response_model=BannerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an ad banner",
)
@limiter.limit(ADMIN_WRITE_RATE_LIMIT)
async def create_ad_banner(
    request: Request,  # noqa: ARG001 — required by slowapi
    data: AdBannerCreate,
    db: DB,
    admin: AdminUser,
) -> BannerResponse:
    if not data.text:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Text is required")
    return await _create(db, BannerKind.AD, data, admin)


@router.put("/adbanner", response_model=BannerResponse, summary="Update an ad banner")
@limiter.limit(ADMIN_WRITE_RATE_LIMIT)
async def update_ad_banner(
    request: Request,  # noqa: ARG001 — required by slowapi
    data: AdBannerUpdate,
    db: DB,
    _admin: AdminUser,
) -> BannerResponse:
    return await _update(db, BannerKind.AD, data)


# === Announcement ===


@router.get(
    "/announcement",
    response_model=BannerResponse,
    responses={404: {"description": "No active announcement"}},
    summary="Get the active announcement",
)
async def get_announcement(db: DB) -> BannerResponse:
    """The live announcement; 404 when none is active."""
    try:
        banner = await BannerService(db).find_active(BannerKind.ANNOUNCEMENT)
    except PyMongoError as exc:
        raise _db_error("fetch") from exc

    if banner is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="No active banner found",
        )
    return BannerResponse(banner=banner)


@router.post(
    "/announcement",
    response_model=BannerResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an announcement",
)
@limiter.limit(ADMIN_WRITE_RATE_LIMIT)
async def create_announcement(
    request: Request,  # noqa: ARG001 — required by slowapi
    data: AnnouncementCreate,
    db: DB,
    admin: AdminUser,
) -> BannerResponse:
    if not data.image:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Image is required")
    return await _create(db, BannerKind.ANNOUNCEMENT, data, admin)


@router.put("/announcement", response_model=BannerResponse, summary="Update an announcement")
@limiter.limit(ADMIN_WRITE_RATE_LIMIT)
async def update_announcement(
    request: Request,  # noqa: ARG001 — required by slowapi
    data: AnnouncementUpdate,
    db: DB,
    _admin: AdminUser,
) -> BannerResponse:
    return await _update(db, BannerKind.ANNOUNCEMENT, data)

