"""Product documents (read-only here: tag facets and KPI counts)."""

from datetime import datetime

from app.models.base import MongoModel

COLLECTION = "products"


class Product(MongoModel):
    """Catalogue product. Only published products are visible to shoppers."""

    name: str = ""
    slug: str | None = None
    price: float = 0
    published: bool = False
    tags: list[str] = []
    created_at: datetime | None = None
