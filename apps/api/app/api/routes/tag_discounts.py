"""Tag discount management endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Query, Request, status
from pymongo.errors import PyMongoError

from app.core.auth import session_user_id
from app.core.deps import DB, AdminUser
from app.core.rate_limit import ADMIN_WRITE_RATE_LIMIT, limiter
from app.schemas.common import SuccessResponse
from app.schemas.tag import TagDiscountCreate, TagDiscountListResponse, TagDiscountResponse
from app.services.tag_service import TagDiscountService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=TagDiscountListResponse, summary="List tag discounts")
async def list_tag_discounts(db: DB) -> TagDiscountListResponse:
    try:
        discounts = await TagDiscountService(db).list_discounts()
    except PyMongoError as exc:
        logger.exception("Failed to list tag discounts")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to list tag discounts",
        ) from exc
    return TagDiscountListResponse(discounts=discounts)


@router.post(
    "",
    response_model=TagDiscountResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create or replace a tag discount",
)
@limiter.limit(ADMIN_WRITE_RATE_LIMIT)
async def save_tag_discount(
    request: Request,  # noqa: ARG001 — required by slowapi
    data: TagDiscountCreate,
    db: DB,
    admin: AdminUser,
) -> TagDiscountResponse:
    """Upsert the discount for a tag (tags are matched lowercased and trimmed)."""
    if not data.tag or not data.tag.strip() or data.percent is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="tag and percent required",
        )

    try:
        discount = await TagDiscountService(db).upsert(
            data.tag,
            data.percent,
            active=data.active,
            created_by=session_user_id(admin),
        )
    except PyMongoError as exc:
        logger.exception("Failed to save tag discount %s", data.tag)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save tag discount",
        ) from exc
    return TagDiscountResponse(discount=discount)


@router.delete("", response_model=SuccessResponse, summary="Delete a tag discount")
@limiter.limit(ADMIN_WRITE_RATE_LIMIT)
async def delete_tag_discount(
    request: Request,  # noqa: ARG001 — required by slowapi
    db: DB,
    _admin: AdminUser,
    tag: str | None = Query(None, description="Tag whose discount to remove"),
) -> SuccessResponse:
    if not tag:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="tag required")

    try:
        await TagDiscountService(db).delete(tag)
    except PyMongoError as exc:
        logger.exception("Failed to delete tag discount %s", tag)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete tag discount",
        ) from exc
    return SuccessResponse()
