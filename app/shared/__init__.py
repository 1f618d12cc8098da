"""Shared utilities used across 3+ features."""

from app.shared.models import IdMixin, TimestampMixin, new_id
from app.shared.schemas import CamelModel, SuccessResponse

__all__ = [
    "CamelModel",
    "IdMixin",
    "SuccessResponse",
    "TimestampMixin",
    "new_id",
]
