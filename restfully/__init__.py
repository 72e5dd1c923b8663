"""restfully - building blocks for typed REST API clients."""

from restfully.errors import ApiError, SerializationError
from restfully.models import (
    ApiRequest,
    ApiResponse,
    EntityModel,
    SupportsEntityResponse,
    get_entity_response,
    set_entity_response,
)
from restfully.serialization import PydanticJsonSerializer, Serializer
from restfully.services import ApiService, ApiServiceBase
from restfully.transports import (
    ApiClient,
    AsyncApiClient,
    AsyncHttpxApiClient,
    HttpxApiClient,
    MockApiClient,
)

__version__ = "0.1.0"

__all__ = [
    "ApiClient",
    "ApiError",
    "ApiRequest",
    "ApiResponse",
    "ApiService",
    "ApiServiceBase",
    "AsyncApiClient",
    "AsyncHttpxApiClient",
    "EntityModel",
    "HttpxApiClient",
    "MockApiClient",
    "PydanticJsonSerializer",
    "SerializationError",
    "Serializer",
    "SupportsEntityResponse",
    "get_entity_response",
    "set_entity_response",
]
