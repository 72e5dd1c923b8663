"""Transports backed by httpx."""

from __future__ import annotations

import json
import threading
from typing import Any, Dict, Mapping, Optional, Set

import httpx
from loguru import logger

from restfully.models import ApiRequest, ApiResponse


def _query_params(parameters: Mapping[str, Any]) -> Dict[str, Any]:
    """Flatten request parameters into values httpx can encode."""
    params: Dict[str, Any] = {}
    for key, value in parameters.items():
        nested = isinstance(value, Mapping) or (
            isinstance(value, (list, tuple))
            and any(isinstance(item, (Mapping, list, tuple)) for item in value)
        )
        params[key] = json.dumps(value) if nested else value
    return params


def _request_kwargs(request: ApiRequest) -> Dict[str, Any]:
    headers = {"Content-Type": request.content_type}
    headers.update(request.headers)
    kwargs: Dict[str, Any] = {
        "headers": headers,
        "params": _query_params(request.parameters),
        "follow_redirects": request.allow_auto_redirect,
    }
    if request.body is not None:
        kwargs["content"] = request.body.encode("utf-8")
    if request.timeout is not None:
        kwargs["timeout"] = request.timeout
    return kwargs


def _to_api_response(response: httpx.Response) -> ApiResponse:
    return ApiResponse(
        status_code=response.status_code,
        status_text=response.reason_phrase,
        content=response.text,
        content_type=response.headers.get("content-type"),
        content_length=len(response.content),
        headers=dict(response.headers),
        response_uri=str(response.url),
    )


def _warn_proxy_ignored(proxy: str) -> None:
    logger.warning(
        "Request proxy {proxy} ignored: the injected httpx client carries its own "
        "proxy configuration",
        proxy=proxy,
    )


def _error_response(request: ApiRequest, exc: httpx.HTTPError) -> ApiResponse:
    logger.error(
        "Transport error on {method} {url}: {error}",
        method=request.method,
        url=request.url,
        error=exc,
    )
    return ApiResponse(
        status_code=0,
        error_message=str(exc) or type(exc).__name__,
        error_exception=exc,
        response_uri=request.url,
    )


class HttpxApiClient:
    """Blocking transport over ``httpx.Client``.

    When the adapter builds its own client from ``client_kwargs``, requests
    naming a proxy go through a dedicated client created on first use with the
    same kwargs. An injected client serves every request unchanged; configure
    proxies on it directly.
    """

    def __init__(self, client: Optional[httpx.Client] = None, **client_kwargs: Any):
        if client is not None and client_kwargs:
            raise TypeError("client_kwargs cannot be combined with an injected client")
        self._client_kwargs = client_kwargs
        self._client = client if client is not None else httpx.Client(**client_kwargs)
        self._owns_client = client is None
        self._proxied: Dict[str, httpx.Client] = {}
        self._ignored_proxies: Set[str] = set()
        self._lock = threading.Lock()

    def _client_for(self, proxy: Optional[str]) -> httpx.Client:
        if not proxy:
            return self._client
        if not self._owns_client:
            if proxy not in self._ignored_proxies:
                self._ignored_proxies.add(proxy)
                _warn_proxy_ignored(proxy)
            return self._client
        with self._lock:
            client = self._proxied.get(proxy)
            if client is None:
                client = httpx.Client(proxy=proxy, **self._client_kwargs)
                self._proxied[proxy] = client
            return client

    def send(self, request: ApiRequest) -> ApiResponse:
        client = self._client_for(request.proxy)
        logger.debug("HTTP {method} {url}", method=request.method, url=request.url)
        try:
            response = client.request(
                request.method, request.url, **_request_kwargs(request)
            )
        except httpx.HTTPError as exc:
            return _error_response(request, exc)
        return _to_api_response(response)

    def close(self) -> None:
        """Close the underlying HTTP clients."""
        with self._lock:
            for client in self._proxied.values():
                client.close()
            self._proxied.clear()
        self._client.close()

    def __enter__(self) -> "HttpxApiClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class AsyncHttpxApiClient:
    """Asynchronous transport over ``httpx.AsyncClient``.

    Proxy handling matches :class:`HttpxApiClient`.
    """

    def __init__(
        self, client: Optional[httpx.AsyncClient] = None, **client_kwargs: Any
    ):
        if client is not None and client_kwargs:
            raise TypeError("client_kwargs cannot be combined with an injected client")
        self._client_kwargs = client_kwargs
        self._client = (
            client if client is not None else httpx.AsyncClient(**client_kwargs)
        )
        self._owns_client = client is None
        self._proxied: Dict[str, httpx.AsyncClient] = {}
        self._ignored_proxies: Set[str] = set()

    def _client_for(self, proxy: Optional[str]) -> httpx.AsyncClient:
        if not proxy:
            return self._client
        if not self._owns_client:
            if proxy not in self._ignored_proxies:
                self._ignored_proxies.add(proxy)
                _warn_proxy_ignored(proxy)
            return self._client
        client = self._proxied.get(proxy)
        if client is None:
            client = httpx.AsyncClient(proxy=proxy, **self._client_kwargs)
            self._proxied[proxy] = client
        return client

    async def send_async(self, request: ApiRequest) -> ApiResponse:
        client = self._client_for(request.proxy)
        logger.debug("HTTP {method} {url}", method=request.method, url=request.url)
        try:
            response = await client.request(
                request.method, request.url, **_request_kwargs(request)
            )
        except httpx.HTTPError as exc:
            return _error_response(request, exc)
        return _to_api_response(response)

    async def close(self) -> None:
        """Close the underlying HTTP clients."""
        for client in self._proxied.values():
            await client.aclose()
        self._proxied.clear()
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHttpxApiClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
