"""Service issuing GET/POST calls through blocking or async transports."""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Optional, Type, TypeVar, Union

from loguru import logger

from restfully.config import Settings, get_settings
from restfully.models import ApiRequest, ApiResponse, HttpMethod
from restfully.serialization import Serializer
from restfully.services.base import HTTP_GET, HTTP_POST, ApiServiceBase
from restfully.transports import ApiClient, AsyncApiClient

T = TypeVar("T")

Transport = Union[ApiClient, AsyncApiClient]


async def _send_cancellable(
    send: Callable[[ApiRequest], Awaitable[ApiResponse]],
    request: ApiRequest,
    cancellation: Optional[asyncio.Event],
) -> ApiResponse:
    """Await ``send(request)`` unless ``cancellation`` fires first."""
    if cancellation is None:
        return await send(request)
    if cancellation.is_set():
        raise asyncio.CancelledError("request cancelled before it was sent")

    sending = asyncio.ensure_future(send(request))
    waiter = asyncio.ensure_future(cancellation.wait())
    try:
        await asyncio.wait({sending, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        sending.cancel()
        raise
    finally:
        waiter.cancel()
    if sending.done():
        return sending.result()
    sending.cancel()
    raise asyncio.CancelledError("request cancelled")


class ApiService(ApiServiceBase):
    """Typed GET/POST helpers for a single API resource path.

    ``client`` may implement :class:`ApiClient`, :class:`AsyncApiClient` or
    both. A separate ``async_client`` can be supplied for the async calls.
    """

    def __init__(
        self,
        base_url: str,
        path: Optional[str],
        client: Optional[Transport],
        serializer: Serializer,
        *,
        async_client: Optional[AsyncApiClient] = None,
        **options: Any,
    ):
        super().__init__(base_url, path, serializer, **options)
        if client is None and async_client is None:
            raise TypeError("client must not be None")
        self._client = client
        self._async_client = async_client if async_client is not None else client

    @classmethod
    def from_settings(
        cls,
        path: Optional[str],
        client: Optional[Transport],
        serializer: Serializer,
        settings: Optional[Settings] = None,
        **kwargs: Any,
    ) -> "ApiService":
        """Create a service using configured base URL and request options."""
        settings = settings or get_settings()
        options = {
            "content_type": settings.content_type,
            "timeout": settings.timeout,
            "allow_auto_redirect": settings.allow_auto_redirect,
            "proxy": settings.proxy,
        }
        options.update(kwargs)
        return cls(str(settings.base_url), path, client, serializer, **options)

    # --- Blocking calls ---

    def get_request(
        self, entity_type: Type[T], data: Any = None, resource: str = ""
    ) -> Optional[T]:
        """GET ``resource`` with ``data`` as query parameters."""
        return self._run_request(resource, HTTP_GET, data, entity_type)

    def post_request(
        self, entity_type: Type[T], data: Any = None, resource: str = ""
    ) -> Optional[T]:
        """POST ``data`` as a JSON body to ``resource``."""
        return self._run_request(resource, HTTP_POST, data, entity_type)

    # --- Async calls ---

    async def get_request_async(
        self,
        entity_type: Type[T],
        data: Any = None,
        resource: str = "",
        *,
        cancellation: Optional[asyncio.Event] = None,
    ) -> Optional[T]:
        return await self._run_request_async(
            resource, HTTP_GET, data, entity_type, cancellation
        )

    async def post_request_async(
        self,
        entity_type: Type[T],
        data: Any = None,
        resource: str = "",
        *,
        cancellation: Optional[asyncio.Event] = None,
    ) -> Optional[T]:
        return await self._run_request_async(
            resource, HTTP_POST, data, entity_type, cancellation
        )

    def _run_request(
        self, resource: str, method: HttpMethod, data: Any, entity_type: Type[T]
    ) -> Optional[T]:
        if not isinstance(self._client, ApiClient):
            raise TypeError(
                f"{type(self._client).__name__} does not support blocking requests"
            )
        request = self.build_request(resource, method, data)
        logger.debug("Sending {method} {url}", method=method, url=request.url)
        response = self._client.send(request)
        return self.build_response(response, entity_type)

    async def _run_request_async(
        self,
        resource: str,
        method: HttpMethod,
        data: Any,
        entity_type: Type[T],
        cancellation: Optional[asyncio.Event],
    ) -> Optional[T]:
        if not isinstance(self._async_client, AsyncApiClient):
            raise TypeError(
                f"{type(self._async_client).__name__} does not support async requests"
            )
        request = self.build_request(resource, method, data)
        logger.debug("Sending {method} {url}", method=method, url=request.url)
        response = await _send_cancellable(
            self._async_client.send_async, request, cancellation
        )
        return self.build_response(response, entity_type)
