"""robots.txt for the public storefront."""

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from app.core.config import settings

router = APIRouter(tags=["seo"])

# Sections that are per-user, transactional or admin-only
DISALLOWED_PATHS = (
    "/api/",
    "/admin/",
    "/checkout/",
    "/cart/",
    "/wishlist/",
    "/auth/",
    "/dashboard/",
    "/my-orders/",
    "/settings/",
    "/test-payment/",
)


def build_robots_txt(base_url: str) -> str:
    """Render crawl directives with the sitemap under ``base_url``."""
    base_url = base_url.rstrip("/")
    lines = ["User-agent: *", "Allow: /"]
    lines += [f"Disallow: {path}" for path in DISALLOWED_PATHS]
    lines += [
        "",
        "# Sitemap",
        f"Sitemap: {base_url}/sitemap.xml",
        "",
        "# Crawl-delay",
        "Crawl-delay: 1",
        "",
        "# Allow Googlebot",
        "User-agent: Googlebot",
        "Allow: /",
        "Crawl-delay: 0",
        "",
        "# Allow Bingbot",
        "User-agent: Bingbot",
        "Allow: /",
        "Crawl-delay: 1",
    ]
    return "\n".join(lines) + "\n"


@router.get("/robots.txt", response_class=PlainTextResponse, include_in_schema=False)
async def robots_txt() -> PlainTextResponse:
    return PlainTextResponse(build_robots_txt(settings.next_public_app_url))
