"""Request building and response handling shared by API services."""

from __future__ import annotations

from typing import Any, Dict, Optional, Type, TypeVar

from loguru import logger

from restfully.errors import ApiError
from restfully.models import ApiRequest, ApiResponse, HttpMethod, set_entity_response
from restfully.serialization import Serializer

T = TypeVar("T")

HTTP_GET: HttpMethod = "GET"
HTTP_POST: HttpMethod = "POST"
DEFAULT_CONTENT_TYPE = "text/json"


class ApiServiceBase:
    """Base for services exposing one resource path of a REST API.

    Subclasses may override :meth:`before_send`, :meth:`get_entity_response`
    and :meth:`handle_error` to customise the request/response flow.
    """

    def __init__(
        self,
        base_url: str,
        path: Optional[str],
        serializer: Serializer,
        *,
        content_type: Optional[str] = None,
        timeout: Optional[float] = None,
        allow_auto_redirect: bool = False,
        proxy: Optional[str] = None,
    ):
        if base_url is None:
            raise TypeError("base_url must not be None")
        if serializer is None:
            raise TypeError("serializer must not be None")
        self._base_url = str(base_url)
        self._path = path or ""
        self._serializer = serializer
        self._content_type = content_type
        self._timeout = timeout
        self._allow_auto_redirect = allow_auto_redirect
        self._proxy = proxy

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def path(self) -> str:
        return self._path

    @property
    def content_type(self) -> Optional[str]:
        return self._content_type

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    @property
    def allow_auto_redirect(self) -> bool:
        return self._allow_auto_redirect

    @property
    def proxy(self) -> Optional[str]:
        return self._proxy

    @property
    def serializer(self) -> Serializer:
        return self._serializer

    # --- Hooks ---

    def before_send(self, data: Any) -> None:
        """Called with the outgoing data before each request is built."""

    def get_entity_response(self, response: ApiResponse) -> Any:
        """Compute the value attached to successfully deserialized entities."""
        return None

    def handle_error(self, response: ApiResponse) -> BaseException:
        """Return the exception raised for a non-success response."""
        if response.error_exception is not None:
            return response.error_exception
        return ApiError(
            response.error_message,
            status_code=response.status_code,
            response=response,
        )

    # --- Request/response flow ---

    def endpoint(self, resource: Optional[str] = None) -> str:
        """Relative endpoint for ``resource`` under the service path."""
        if not resource or not resource.strip():
            return self._path
        return f"{self._path}/{resource}"

    def build_request(
        self, resource: Optional[str], method: HttpMethod, data: Any
    ) -> ApiRequest:
        self.before_send(data)
        request = ApiRequest(
            base_address=self._base_url,
            endpoint=self.endpoint(resource),
            method=method,
            content_type=self._content_type or DEFAULT_CONTENT_TYPE,
            timeout=self._timeout,
            allow_auto_redirect=self._allow_auto_redirect,
            proxy=self._proxy,
        )
        if data is None:
            return request

        if method == HTTP_POST:
            request.body = self._serializer.serialize(data)
        elif method == HTTP_GET:
            # Round-trip through JSON so the serializer's naming rules apply
            # to query parameter keys and values.
            text = self._serializer.serialize(data)
            values = self._serializer.deserialize(text, Dict[str, Any]) or {}
            request.parameters.update(values)
        return request

    def build_response(self, response: ApiResponse, entity_type: Type[T]) -> Optional[T]:
        if not response.is_success:
            logger.error(
                "API error {status} on {url}: {message}",
                status=response.status_code,
                url=response.response_uri,
                message=response.error_message,
            )
            raise self.handle_error(response)

        logger.debug(
            "API response {status} from {url}",
            status=response.status_code,
            url=response.response_uri,
        )
        entity = self._serializer.deserialize(response.content, entity_type)
        if entity is not None:
            entity_response = self.get_entity_response(response)
            if entity_response is not None:
                set_entity_response(entity, entity_response)
        return entity
