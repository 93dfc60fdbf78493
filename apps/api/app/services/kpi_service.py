"""Dashboard KPIs: admin-entered tiles plus figures computed from live data."""

import logging

from motor.motor_asyncio import AsyncIOMotorDatabase

from app.models import kpi, order, product
from app.models.base import document_id, utc_now
from app.models.kpi import Kpi
from app.models.order import PaymentStatus
from app.schemas.kpi import ComputedKpi

logger = logging.getLogger(__name__)

REVENUE_PIPELINE = [
    {"$match": {"paymentStatus": PaymentStatus.PAID.value}},
    {"$group": {"_id": None, "total": {"$sum": "$total"}, "orders": {"$sum": 1}}},
]


def _group_indian(digits: str) -> str:
    """Indian digit grouping: last three digits, then pairs (12,34,567)."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    pairs = []
    while len(head) > 2:
        pairs.insert(0, head[-2:])
        head = head[:-2]
    if head:
        pairs.insert(0, head)
    return ",".join(pairs + [tail])


def format_inr(amount: float) -> str:
    """Format an amount in rupees, e.g. ``123456.5`` -> ``"₹1,23,456.5"``."""
    sign = "-" if amount < 0 else ""
    whole, _, fraction = f"{abs(amount):.2f}".partition(".")
    fraction = fraction.rstrip("0")
    formatted = _group_indian(whole)
    if fraction:
        formatted = f"{formatted}.{fraction}"
    return f"{sign}₹{formatted}"


class KpiService:
    def __init__(self, db: AsyncIOMotorDatabase) -> None:
        self.db = db
        self.collection = db[kpi.COLLECTION]

    async def list_stored(self) -> list[Kpi]:
        """Admin-entered KPIs, newest first."""
        cursor = self.collection.find({}).sort("createdAt", -1)
        return [Kpi.from_mongo(raw) for raw in await cursor.to_list(length=None)]

    async def compute_live(self) -> list[ComputedKpi]:
        """Revenue and counts from paid orders, users and published products."""
        rows = await self.db[order.COLLECTION].aggregate(REVENUE_PIPELINE).to_list(length=None)
        revenue = rows[0]["total"] if rows else 0
        paid_orders = rows[0]["orders"] if rows else 0

        customers = await self.db[kpi.USERS_COLLECTION].count_documents({})
        active_products = await self.db[product.COLLECTION].count_documents({"published": True})

        return [
            ComputedKpi(label="Total Revenue", value=format_inr(revenue or 0)),
            ComputedKpi(label="Orders", value=str(paid_orders)),
            ComputedKpi(label="Customers", value=str(customers)),
            ComputedKpi(label="Active Products", value=str(active_products)),
        ]

    async def create(self, label: str, value: str, created_by: str | None = None) -> Kpi:
        model = Kpi(label=label.strip(), value=value.strip(), created_by=created_by)
        document = {**model.to_mongo(), "createdAt": utc_now()}
        result = await self.collection.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info("Created KPI %s", result.inserted_id)
        return Kpi.from_mongo(document)

    async def delete(self, kpi_id: str) -> bool:
        result = await self.collection.delete_one({"_id": document_id(kpi_id)})
        return result.deleted_count > 0
