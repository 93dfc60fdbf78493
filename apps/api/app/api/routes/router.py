"""API router combining all route modules."""

from fastapi import APIRouter

from app.api.routes import (
    announcements,
    banners,
    health,
    invoice_templates,
    kpis,
    orders,
    payment,
    tag_discounts,
    tags,
)

api_router = APIRouter()

# Health probes (no prefix: /health/db, /auth/health)
api_router.include_router(health.router)

# Storefront banners (public read, admin toggles)
api_router.include_router(
    banners.router,
    prefix="/banners",
    tags=["banners"],
)

# Per-kind banner editor endpoints
api_router.include_router(
    announcements.router,
    prefix="/announcements",
    tags=["banners"],
)

# Product tag facets
api_router.include_router(
    tags.router,
    prefix="/tags",
    tags=["tags"],
)

# Tag discounts (public read, admin writes)
api_router.include_router(
    tag_discounts.router,
    prefix="/tag-discounts",
    tags=["tags"],
)

# Order history (requires auth)
api_router.include_router(
    orders.router,
    prefix="/orders",
    tags=["orders"],
)

# Dummy payment callback (no auth, rate limited)
api_router.include_router(
    payment.router,
    prefix="/payment",
    tags=["payment"],
)

# Dashboard KPIs
api_router.include_router(
    kpis.router,
    prefix="/kpis",
    tags=["admin"],
)

# Invoice templates (admin)
api_router.include_router(
    invoice_templates.router,
    prefix="/admin/invoice-template",
    tags=["admin"],
)
