"""Session authentication for FastAPI using NextAuth-signed JWTs."""

from typing import Annotated, Any

import jwt
from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.config import settings

# HTTP Bearer token security scheme
bearer_scheme = HTTPBearer(auto_error=False)

# Cookies NextAuth writes the session token to (plain and HTTPS-only variants)
SESSION_COOKIES = (
    "__Secure-next-auth.session-token",
    "next-auth.session-token",
)

ADMIN_ROLE = "admin"


def verify_token(token: str) -> dict[str, Any]:
    """Verify a session token signed with NEXTAUTH_SECRET.

    Args:
        token: The JWT taken from the bearer header or session cookie

    Returns:
        The decoded token payload

    Raises:
        HTTPException: If auth is not configured or the token is invalid/expired
    """
    if not settings.nextauth_secret:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication is not configured",
        )

    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.nextauth_secret,
            algorithms=["HS256"],
            options={"verify_exp": True, "verify_aud": False},
        )
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session has expired",
            headers={"WWW-Authenticate": "Bearer"},
        )
    except jwt.InvalidTokenError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid session: {str(e)}",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if not session_user_id(payload):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session: no user id",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload


def _extract_token(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None,
) -> str | None:
    if credentials is not None:
        return credentials.credentials
    for name in SESSION_COOKIES:
        token = request.cookies.get(name)
        if token:
            return token
    return None


def session_user_id(user: dict[str, Any]) -> str:
    """User id from a session payload (NextAuth puts it in ``id`` or ``sub``)."""
    return str(user.get("id") or user.get("sub") or "")


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> dict[str, Any]:
    """Get the signed-in user from the session token.

    Returns:
        The decoded session payload

    Raises:
        HTTPException: 401 if no token is present or the token is invalid
    """
    token = _extract_token(request, credentials)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return verify_token(token)


async def get_admin_user(
    user: dict[str, Any] = Depends(get_current_user),
) -> dict[str, Any]:
    """Require a signed-in user with the admin role."""
    if user.get("role") != ADMIN_ROLE:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return user


# Type aliases for dependency injection
CurrentUser = Annotated[dict[str, Any], Depends(get_current_user)]
AdminUser = Annotated[dict[str, Any], Depends(get_admin_user)]
