"""Common Pydantic schemas used across the API."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """Base schema: snake_case attributes, camelCase on the wire."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        from_attributes=True,
        populate_by_name=True,
    )


class ErrorResponse(BaseSchema):
    """Error response schema."""

    error: str


class SuccessResponse(BaseSchema):
    """Acknowledgement for deletes and other bodiless writes."""

    success: bool = True
