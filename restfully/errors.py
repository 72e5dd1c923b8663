"""Exceptions raised by restfully services and serializers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from restfully.models import ApiResponse


class ApiError(Exception):
    """Raised when an API call returns a non-success response."""

    def __init__(
        self,
        message: Optional[str] = None,
        *,
        status_code: Optional[int] = None,
        response: Optional["ApiResponse"] = None,
    ):
        self.status_code = status_code
        self.response = response
        if message is None:
            message = f"Request failed with status {status_code}"
        super().__init__(message)


class SerializationError(ApiError, ValueError):
    """Raised when a value cannot be converted to or from JSON text."""
