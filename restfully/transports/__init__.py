"""Transport contracts and ready-made implementations."""

from .base import ApiClient, AsyncApiClient
from .httpx_client import AsyncHttpxApiClient, HttpxApiClient
from .mock_client import MockApiClient

__all__ = [
    "ApiClient",
    "AsyncApiClient",
    "AsyncHttpxApiClient",
    "HttpxApiClient",
    "MockApiClient",
]
