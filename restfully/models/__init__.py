"""Value objects exchanged between services and transports."""

from .entity import (
    EntityModel,
    SupportsEntityResponse,
    get_entity_response,
    set_entity_response,
)
from .request import ApiRequest, HttpMethod
from .response import ApiResponse, ResponseHeaders

__all__ = [
    "ApiRequest",
    "ApiResponse",
    "EntityModel",
    "HttpMethod",
    "ResponseHeaders",
    "SupportsEntityResponse",
    "get_entity_response",
    "set_entity_response",
]
