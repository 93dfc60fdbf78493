"""Health probe response schemas."""

from app.schemas.common import BaseSchema


class LivenessResponse(BaseSchema):
    status: str


class AuthHealthResponse(BaseSchema):
    """Whether every required auth variable is set, and which are not."""

    ok: bool
    missing: list[str]


class DbHealthResponse(BaseSchema):
    """Database ready-state snapshot."""

    ok: bool
    state: int
    now: str


class DbHealthError(BaseSchema):
    ok: bool = False
    error: str
