"""Declarative request descriptors."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, TypeVar, Union

from apiclient.models import EmptyResponse, HTTPMethod, RawResponse, WireRequest

from .body import RequestBody

ResponseT = TypeVar("ResponseT")

BodySource = Union[RequestBody, Callable[[], Union[RequestBody, None]]]
Transform = Callable[[bytes, RawResponse], ResponseT]


def identity(request: WireRequest) -> WireRequest:
    return request


@dataclass(frozen=True)
class Request(Generic[ResponseT]):
    """Immutable description of a single call.

    Either ``transform`` turns the raw payload into the result, or the client's
    decoder validates it into ``response_type``; never both.

    ``body`` may be a body instance or a zero-argument callable producing one,
    in which case construction is deferred until the request is sent.
    """

    method: HTTPMethod = HTTPMethod.GET
    path: str | None = None
    headers: Mapping[str, str] = field(default_factory=dict)
    body: BodySource | None = None
    response_type: Any = EmptyResponse
    prepare: Callable[[WireRequest], WireRequest] = identity
    transform: Transform[ResponseT] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.method, HTTPMethod):
            object.__setattr__(self, "method", HTTPMethod(str(self.method).upper()))
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))

    def resolve_body(self) -> RequestBody | None:
        """Return the body instance, invoking a deferred factory if needed."""

        if self.body is None:
            return None
        if hasattr(self.body, "encode"):
            return self.body  # type: ignore[return-value]
        return self.body()  # type: ignore[operator]


__all__ = ["Request", "ResponseT", "identity"]
