"""MongoDB document models."""

from app.models.banner import (
    AdBanner,
    AnnouncementBanner,
    Banner,
    BannerKind,
    BannerLink,
    parse_banner,
)
from app.models.base import MongoModel, document_id, from_mongo, utc_now
from app.models.invoice_template import InvoiceTemplate
from app.models.kpi import Kpi
from app.models.order import Order, OrderStatus, PaymentStatus
from app.models.product import Product
from app.models.tag_discount import TagDiscount, normalize_tag

__all__ = [
    # Base
    "MongoModel",
    "document_id",
    "from_mongo",
    "utc_now",
    # Banners
    "AdBanner",
    "AnnouncementBanner",
    "Banner",
    "BannerKind",
    "BannerLink",
    "parse_banner",
    # Catalogue
    "Product",
    "TagDiscount",
    "normalize_tag",
    # Orders
    "Order",
    "OrderStatus",
    "PaymentStatus",
    # Admin
    "Kpi",
    "InvoiceTemplate",
]
