"""Order history endpoints for signed-in shoppers."""

import logging

from fastapi import APIRouter, HTTPException, status
from pymongo.errors import PyMongoError

from app.core.auth import session_user_id
from app.core.deps import DB, CurrentUser
from app.schemas.common import ErrorResponse
from app.schemas.order import UserOrdersResponse
from app.services.order_service import OrderService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/user",
    response_model=UserOrdersResponse,
    responses={401: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    summary="List my orders",
    description="Orders placed by the signed-in user, newest first.",
)
async def list_user_orders(user: CurrentUser, db: DB) -> UserOrdersResponse:
    """Return the session user's orders; 401 without a valid session."""
    user_id = session_user_id(user)
    try:
        orders = await OrderService(db).list_for_user(user_id)
    except PyMongoError as exc:
        logger.exception("Failed to fetch orders for user %s", user_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch user orders",
        ) from exc

    return UserOrdersResponse(orders=orders)
