"""Protocols implemented by HTTP transports."""

from typing import Protocol, runtime_checkable

from restfully.models import ApiRequest, ApiResponse


@runtime_checkable
class ApiClient(Protocol):
    """Blocking transport for sending requests to a REST API server."""

    def send(self, request: ApiRequest) -> ApiResponse:
        """Send ``request`` and return the server response.

        Transport failures are reported through the response error fields
        rather than raised.
        """
        ...


@runtime_checkable
class AsyncApiClient(Protocol):
    """Asynchronous transport for sending requests to a REST API server.

    Callers cancel an in-flight request by cancelling the awaiting task.
    """

    async def send_async(self, request: ApiRequest) -> ApiResponse:
        ...
