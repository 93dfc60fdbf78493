"""Dummy payment callback used by the placeholder checkout."""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError

from app.core.deps import DB
from app.core.rate_limit import PAYMENT_RATE_LIMIT, limiter
from app.schemas.order import PaymentRequest, PaymentResponse
from app.services.order_service import OrderService, checkout_success_url

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=PaymentResponse,
    responses={500: {"model": PaymentResponse}},
    summary="Complete a dummy payment",
)
@limiter.limit(PAYMENT_RATE_LIMIT)
async def complete_payment(
    request: Request,  # noqa: ARG001 — required by slowapi
    data: PaymentRequest,
    db: DB,
) -> PaymentResponse | JSONResponse:
    """Mark the order paid and send the shopper to the success page.

    This is not a gateway integration: there is no signature check, no
    idempotency key and no reconciliation of ``amount`` or ``user_id``.
    """
    logger.info(
        "Dummy payment triggered for order %s (user=%s, amount=%s)",
        data.order_id,
        data.user_id,
        data.amount,
    )

    try:
        await OrderService(db).mark_paid(data.order_id, user_id=data.user_id, amount=data.amount)
    except PyMongoError:
        logger.exception("Dummy payment failed for order %s", data.order_id)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=PaymentResponse(success=False, message="Dummy payment failed").model_dump(
                by_alias=True, exclude_none=True
            ),
        )

    return PaymentResponse(
        success=True,
        message="Dummy payment successful",
        redirect_url=checkout_success_url(data.order_id),
    )
