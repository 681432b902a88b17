"""Response envelope and pagination schemas."""

import math
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Envelope wrapping every successful response."""

    status: Literal["success"] = "success"
    message: str | None = None
    data: T | None = None


class ErrorResponse(BaseModel):
    """Envelope for error responses. ``error`` is only set in debug mode."""

    status: Literal["error"] = "error"
    message: str
    error: str | None = None


class Pagination(BaseModel):
    current: int
    pages: int
    total: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(current=page, pages=math.ceil(total / limit), total=total)


def split_csv(value: str | None) -> list[str]:
    """Split a comma separated query parameter, dropping empty parts."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]
