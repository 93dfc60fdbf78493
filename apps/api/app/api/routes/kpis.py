"""Dashboard KPI endpoints."""

import logging

from fastapi import APIRouter, HTTPException, Query, Request, status
from pymongo.errors import PyMongoError

from app.core.auth import session_user_id
from app.core.deps import DB, AdminUser
from app.core.rate_limit import ADMIN_WRITE_RATE_LIMIT, limiter
from app.schemas.common import SuccessResponse
from app.schemas.kpi import ComputedKpi, KpiCreate, KpiListResponse, KpiResponse
from app.services.kpi_service import KpiService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=KpiListResponse, summary="List KPIs")
async def list_kpis(db: DB) -> KpiListResponse:
    """Stored KPIs plus live figures.

    If the live figures cannot be computed the stored KPIs are still returned
    with an empty ``computed`` list.
    """
    service = KpiService(db)

    try:
        stored = await service.list_stored()
    except PyMongoError as exc:
        logger.exception("Failed to list stored KPIs")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch KPIs",
        ) from exc

    computed: list[ComputedKpi] = []
    try:
        computed = await service.compute_live()
    except PyMongoError:
        logger.exception("Failed to compute live KPIs")

    return KpiListResponse(kpis=stored, computed=computed)


@router.post(
    "",
    response_model=KpiResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a KPI",
)
@limiter.limit(ADMIN_WRITE_RATE_LIMIT)
async def create_kpi(
    request: Request,  # noqa: ARG001 — required by slowapi
    data: KpiCreate,
    db: DB,
    admin: AdminUser,
) -> KpiResponse:
    try:
        kpi = await KpiService(db).create(data.label, data.value, created_by=session_user_id(admin))
    except PyMongoError as exc:
        logger.exception("Failed to create KPI")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create KPI",
        ) from exc
    return KpiResponse(kpi=kpi)


@router.delete("", response_model=SuccessResponse, summary="Delete a KPI")
@limiter.limit(ADMIN_WRITE_RATE_LIMIT)
async def delete_kpi(
    request: Request,  # noqa: ARG001 — required by slowapi
    db: DB,
    _admin: AdminUser,
    id: str | None = Query(None, description="KPI id"),  # noqa: A002
) -> SuccessResponse:
    if not id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="id required")

    try:
        await KpiService(db).delete(id)
    except PyMongoError as exc:
        logger.exception("Failed to delete KPI %s", id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete KPI",
        ) from exc
    return SuccessResponse()
