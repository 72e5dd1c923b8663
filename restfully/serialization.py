"""JSON serializer contract and its pydantic implementation."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Optional, Protocol, Type, TypeVar, runtime_checkable

from pydantic import (
    BaseModel,
    PydanticSchemaGenerationError,
    TypeAdapter,
    ValidationError,
)
from pydantic_core import PydanticSerializationError

from restfully.errors import SerializationError

T = TypeVar("T")


@lru_cache(maxsize=256)
def _cached_adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def _adapter(type_: Any) -> TypeAdapter[Any]:
    """Return a type adapter for ``type_``, shared across calls when hashable."""
    try:
        hash(type_)
    except TypeError:
        return TypeAdapter(type_)
    return _cached_adapter(type_)


@runtime_checkable
class Serializer(Protocol):
    """Converts values to and from JSON text."""

    def serialize(self, value: Any) -> str:
        ...

    def deserialize(self, text: str, type_: Type[T]) -> Optional[T]:
        ...


class PydanticJsonSerializer:
    """Serializer backed by pydantic models and type adapters.

    Field aliases decide the JSON names when ``by_alias`` is set, so models
    declared with camelCase aliases produce camelCase bodies and query keys.
    """

    def __init__(self, *, by_alias: bool = True, exclude_none: bool = False):
        self.by_alias = by_alias
        self.exclude_none = exclude_none

    def serialize(self, value: Any) -> str:
        try:
            if isinstance(value, BaseModel):
                return value.model_dump_json(
                    by_alias=self.by_alias, exclude_none=self.exclude_none
                )
            adapter = _adapter(type(value))
            raw = adapter.dump_json(
                value, by_alias=self.by_alias, exclude_none=self.exclude_none
            )
        except (PydanticSchemaGenerationError, PydanticSerializationError) as exc:
            raise SerializationError(
                f"Cannot serialize {type(value).__name__}: {exc}"
            ) from exc
        return raw.decode("utf-8")

    def deserialize(self, text: str, type_: Type[T]) -> Optional[T]:
        # Blank bodies and a bare JSON null both mean "no entity".
        if not text or text.strip() in ("", "null"):
            return None
        try:
            return _adapter(type_).validate_json(text)
        except (PydanticSchemaGenerationError, ValidationError) as exc:
            raise SerializationError(
                f"Cannot deserialize payload into {getattr(type_, '__name__', type_)}: "
                f"{exc}"
            ) from exc
