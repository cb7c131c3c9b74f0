"""Transport contract consumed by the client pipeline."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from apiclient.models import RawResponse, WireRequest


@runtime_checkable
class Transport(Protocol):
    """Performs one network exchange for a fully prepared request.

    Implementations raise ``apiclient.errors.InvalidRequestError`` when the
    request cannot be sent at all and ``apiclient.errors.TransportError`` for
    network failures (timeouts, cancellations, connection problems).
    """

    async def perform(self, request: WireRequest) -> RawResponse: ...

    async def close(self) -> None: ...
