"""Rate limiting configuration using slowapi."""

from slowapi import Limiter
from starlette.requests import Request

# Checkout payment callback, per client IP
PAYMENT_RATE_LIMIT = "10/minute"

# Admin writes (banners, KPIs, discounts, uploads), per client IP
ADMIN_WRITE_RATE_LIMIT = "30/minute"


def _get_real_client_ip(request: Request) -> str:
    """Extract the real client IP behind a reverse proxy or CDN."""
    return (
        request.headers.get("CF-Connecting-IP")
        or request.headers.get("X-Forwarded-For", "").split(",")[0].strip()
        or (request.client.host if request.client else "127.0.0.1")
    )


limiter = Limiter(key_func=_get_real_client_ip)
