"""Structured encode/decode strategies backed by Pydantic."""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Protocol, TypeVar, runtime_checkable

from pydantic import TypeAdapter
from pydantic_core import to_json

from apiclient.models import EmptyResponse

T = TypeVar("T")


@runtime_checkable
class Encoder(Protocol):
    def encode(self, value: Any) -> bytes: ...


@runtime_checkable
class Decoder(Protocol):
    def decode(self, data: bytes, response_type: Any) -> Any: ...


@lru_cache(maxsize=256)
def _cached_adapter(response_type: Any) -> TypeAdapter[Any]:
    return TypeAdapter(response_type)


def type_adapter(response_type: Any) -> TypeAdapter[Any]:
    """Return a (cached where possible) TypeAdapter for ``response_type``."""

    try:
        return _cached_adapter(response_type)
    except TypeError:
        # unhashable annotations
        return TypeAdapter(response_type)


class JSONEncoder:
    """Serialize models, dataclasses and builtins to JSON bytes."""

    def __init__(self, *, by_alias: bool = True, exclude_none: bool = False) -> None:
        self.by_alias = by_alias
        self.exclude_none = exclude_none

    def encode(self, value: Any) -> bytes:
        return to_json(value, by_alias=self.by_alias, exclude_none=self.exclude_none)


class JSONDecoder:
    """Validate JSON bytes into ``response_type``.

    Anything ``pydantic.TypeAdapter`` accepts can be a response type: models,
    dataclasses, ``TypedDict``s, containers and scalars. ``EmptyResponse`` is
    returned without looking at the payload.
    """

    def __init__(self, *, strict: bool | None = None) -> None:
        self.strict = strict

    def decode(self, data: bytes, response_type: type[T] | Any) -> T:
        if response_type is EmptyResponse:
            return EmptyResponse()  # type: ignore[return-value]
        return type_adapter(response_type).validate_json(data, strict=self.strict)


__all__ = ["Decoder", "Encoder", "JSONDecoder", "JSONEncoder", "type_adapter"]
