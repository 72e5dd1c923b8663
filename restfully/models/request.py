"""Request sent through an API transport."""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field

HttpMethod = Literal["GET", "POST"]


class ApiRequest(BaseModel):
    """A single request against a REST API endpoint.

    ``base_address`` and ``endpoint`` are required; everything else is
    pass-through configuration for the transport. ``timeout`` is expressed in
    seconds.
    """

    base_address: str
    endpoint: str
    method: HttpMethod = "GET"
    headers: Dict[str, str] = Field(default_factory=dict)
    parameters: Dict[str, Any] = Field(default_factory=dict)
    body: Optional[str] = None
    content_type: str = "text/json"
    timeout: Optional[float] = None
    allow_auto_redirect: bool = False
    proxy: Optional[str] = None

    @property
    def url(self) -> str:
        """Absolute URL of the endpoint."""
        if not self.endpoint:
            return self.base_address
        return f"{self.base_address.rstrip('/')}/{self.endpoint.lstrip('/')}"
