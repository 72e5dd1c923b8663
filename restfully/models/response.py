"""Response returned by an API transport."""

from collections.abc import Mapping as MappingABC
from typing import Dict, Iterator, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

HTTP_OK = 200


class ResponseHeaders(MappingABC):
    """Read-only view over a copy of the response headers."""

    def __init__(self, headers: Optional[Mapping[str, str]] = None):
        self._headers: Dict[str, str] = dict(headers or {})

    def __getitem__(self, key: str) -> str:
        return self._headers[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)

    def __repr__(self) -> str:
        return f"ResponseHeaders({self._headers!r})"


class ApiResponse(BaseModel):
    """Outcome of a request.

    Either the HTTP fields describe a completed exchange, or ``error_message``
    and ``error_exception`` describe why no usable exchange happened. In the
    latter case transports report ``status_code`` 0.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    status_code: int
    status_text: str = ""
    content: str = ""
    content_type: Optional[str] = None
    content_length: int = 0
    headers: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    response_uri: Optional[str] = None
    error_message: Optional[str] = None
    error_exception: Optional[BaseException] = None

    @field_validator("headers", mode="after")
    @classmethod
    def _freeze_headers(cls, value: Mapping[str, str]) -> ResponseHeaders:
        return ResponseHeaders(value)

    @field_serializer("headers")
    def _dump_headers(self, value: Mapping[str, str]) -> Dict[str, str]:
        return dict(value)

    @property
    def is_success(self) -> bool:
        return self.status_code == HTTP_OK

    def __str__(self) -> str:
        return (
            f"StatusCode: {self.status_code}, Content-Type: {self.content_type}, "
            f"Content-Length: {self.content_length}"
        )
