"""Admin-entered KPI tiles."""

from datetime import datetime

from app.models.base import MongoModel

COLLECTION = "kpis"

# Collections the live KPIs are computed from
USERS_COLLECTION = "users"


class Kpi(MongoModel):
    label: str
    value: str
    created_by: str | None = None
    created_at: datetime | None = None
