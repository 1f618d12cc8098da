"""Uniform JSON error envelope.

Every failed request is answered with the same body shape so storefront
and admin clients can branch on ``success`` alone::

    {"success": false, "message": "Product Not Found", "code": "NOT_FOUND",
     "requestId": "..."}
"""

from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from app.core.logging import request_id_ctx


class ErrorEnvelope(BaseModel):
    """Body returned for every error response.

    Attributes:
        success: Always False.
        message: Human-readable explanation, safe to show to end users.
        code: Machine-readable error code.
        request_id: Request correlation ID, echoed from X-Request-ID.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool = Field(False, description="Always false for errors.")
    message: str = Field(..., description="Human-readable error message.")
    code: str = Field("INTERNAL_ERROR", description="Machine-readable error code.")
    request_id: str | None = Field(None, description="Request correlation ID.")


def error_response(
    status: int,
    message: str,
    error_code: str = "INTERNAL_ERROR",
) -> JSONResponse:
    """Build the JSON error envelope for a failed request.

    Args:
        status: HTTP status code.
        message: Human-readable error message.
        error_code: Machine-readable error code.

    Returns:
        JSONResponse carrying the serialized envelope.
    """
    envelope = ErrorEnvelope(
        message=message,
        code=error_code,
        request_id=request_id_ctx.get(),
    )
    return JSONResponse(
        status_code=status,
        content=envelope.model_dump(by_alias=True),
    )
