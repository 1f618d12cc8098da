"""Shared Pydantic schemas for API responses."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialising snake_case fields as camelCase JSON keys.

    Clients send and receive camelCase (``numOfReviews``, ``shippingInfo``);
    Python code uses snake_case. Both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SuccessResponse(CamelModel):
    """Envelope for mutations that only report an outcome."""

    success: bool = Field(True, description="Always true for successful requests.")
    message: str = Field(..., description="Human-readable outcome message.")
