"""In-memory transport replaying canned responses."""

from __future__ import annotations

import asyncio
import json
from collections import deque
from typing import Any, Deque, Dict, Iterable, List, Optional, Tuple

from loguru import logger

from restfully.models import ApiRequest, ApiResponse


class MockApiClient:
    """Transport double implementing both the blocking and async contracts.

    Responses are resolved by exact ``(method, endpoint)`` route first, then
    from the queue, then the default. Unmatched requests get a 404 response.
    """

    def __init__(
        self,
        responses: Optional[Iterable[ApiResponse]] = None,
        *,
        default: Optional[ApiResponse] = None,
        delay: float = 0.0,
    ):
        self.requests: List[ApiRequest] = []
        self.delay = delay
        self._queue: Deque[ApiResponse] = deque(responses or [])
        self._routes: Dict[Tuple[str, str], ApiResponse] = {}
        self._default = default

    @staticmethod
    def json_response(payload: Any, status_code: int = 200) -> ApiResponse:
        """Build a JSON response around ``payload``."""
        content = json.dumps(payload)
        return ApiResponse(
            status_code=status_code,
            status_text="OK" if status_code == 200 else "",
            content=content,
            content_type="application/json",
            content_length=len(content.encode("utf-8")),
            headers={"content-type": "application/json"},
        )

    def enqueue(self, response: ApiResponse) -> None:
        self._queue.append(response)

    def add_route(self, method: str, endpoint: str, response: ApiResponse) -> None:
        self._routes[(method.upper(), endpoint)] = response

    @property
    def last_request(self) -> Optional[ApiRequest]:
        return self.requests[-1] if self.requests else None

    def send(self, request: ApiRequest) -> ApiResponse:
        self.requests.append(request)
        logger.debug(
            "Mock {method} {endpoint}", method=request.method, endpoint=request.endpoint
        )
        route = self._routes.get((request.method, request.endpoint))
        if route is not None:
            return route
        if self._queue:
            return self._queue.popleft()
        if self._default is not None:
            return self._default
        return ApiResponse(
            status_code=404,
            status_text="Not Found",
            error_message=f"No mock response for {request.method} {request.endpoint}",
            response_uri=request.url,
        )

    async def send_async(self, request: ApiRequest) -> ApiResponse:
        await asyncio.sleep(self.delay)
        return self.send(request)
