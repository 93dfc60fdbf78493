"""Pydantic schemas for request/response validation."""

from app.schemas.common import BaseSchema, ErrorResponse, SuccessResponse

__all__ = [
    "BaseSchema",
    "ErrorResponse",
    "SuccessResponse",
]
