"""Tag facet endpoint for storefront filters."""

import logging

from fastapi import APIRouter, HTTPException, status
from pymongo.errors import PyMongoError

from app.core.deps import DB
from app.schemas.common import ErrorResponse
from app.schemas.tag import TagsResponse
from app.services.tag_service import TagService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "",
    response_model=TagsResponse,
    responses={500: {"model": ErrorResponse}},
    summary="List product tags",
    description="Tags used by published products with how many products carry each.",
)
async def list_tags(db: DB) -> TagsResponse:
    """Tag counts over published products, most used first."""
    try:
        tags = await TagService(db).tag_counts()
    except PyMongoError as exc:
        logger.exception("Tag aggregation failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch tags",
        ) from exc

    return TagsResponse(tags=tags)
