"""Pydantic schemas for dashboard KPIs."""

from pydantic import Field

from app.models.kpi import Kpi
from app.schemas.common import BaseSchema


class KpiCreate(BaseSchema):
    label: str = Field(..., min_length=1, max_length=100)
    value: str = Field(..., min_length=1, max_length=100)


class ComputedKpi(BaseSchema):
    """A KPI derived from live order/user/product data."""

    label: str
    value: str


class KpiResponse(BaseSchema):
    kpi: Kpi


class KpiListResponse(BaseSchema):
    kpis: list[Kpi]
    computed: list[ComputedKpi]
