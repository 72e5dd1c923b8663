"""Attaching auxiliary response data to deserialized entities."""

from __future__ import annotations

from typing import Any, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, PrivateAttr


@runtime_checkable
class SupportsEntityResponse(Protocol):
    """Entity able to receive a value computed from the raw API response."""

    def set_entity_response(self, response: Any) -> None:
        ...


class EntityModel(BaseModel):
    """Pydantic base for API entities carrying an auxiliary response value.

    The value lives in a private slot, so it is never read from or written to
    the JSON payload.
    """

    _response: Any = PrivateAttr(default=None)

    @property
    def response(self) -> Any:
        return self._response

    def set_entity_response(self, response: Any) -> None:
        self._response = response


def set_entity_response(entity: Any, response: Any) -> None:
    """Attach ``response`` to ``entity`` when the entity supports it."""
    if entity is None:
        return
    if isinstance(entity, SupportsEntityResponse):
        entity.set_entity_response(response)


def get_entity_response(entity: Any) -> Optional[Any]:
    """Return the value attached to ``entity``, if any."""
    if entity is None or not isinstance(entity, SupportsEntityResponse):
        return None
    return getattr(entity, "response", None)
