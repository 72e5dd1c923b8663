"""Service layer composing transports and serializers into API calls."""

from .api_service import ApiService
from .base import HTTP_GET, HTTP_POST, ApiServiceBase

__all__ = ["ApiService", "ApiServiceBase", "HTTP_GET", "HTTP_POST"]
