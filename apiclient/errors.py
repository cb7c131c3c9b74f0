"""Error taxonomy surfaced by the client pipeline and its transports."""

from __future__ import annotations

from enum import Enum
from typing import Generic, TypeVar

ValidationErrorT = TypeVar("ValidationErrorT", bound=BaseException)


class ClientError(RuntimeError):
    """Base class for every failure raised by ``Client.send`` and publishers.

    Exactly one subclass is raised per failed call. The originating exception
    is available as ``cause`` and is also chained as ``__cause__``.
    """

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class EncodingError(ClientError):
    """The request body could not be serialized; nothing was sent."""

    def __init__(self, cause: BaseException | str) -> None:
        if isinstance(cause, BaseException):
            super().__init__(f"Request body encoding failed: {cause}", cause)
        else:
            super().__init__(f"Request body encoding failed: {cause}")


class DecodingError(ClientError):
    """The response passed validation but could not be decoded or transformed."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Response decoding failed: {cause}", cause)


class RequestErrorKind(str, Enum):
    """Why no usable response was obtained."""

    INVALID_REQUEST = "invalid_request"
    TRANSPORT = "transport"
    UNKNOWN = "unknown"


class RequestError(ClientError):
    """The transport did not produce a response."""

    def __init__(self, kind: RequestErrorKind, cause: BaseException) -> None:
        super().__init__(f"Request failed ({kind.value}): {cause}", cause)
        self.kind = kind


class ResponseError(ClientError, Generic[ValidationErrorT]):
    """The configured validator rejected the response.

    ``error`` is whatever the validator raised.
    """

    def __init__(self, error: ValidationErrorT) -> None:
        super().__init__(f"Response rejected: {error}", error)
        self.error: ValidationErrorT = error


class TransportFailure(str, Enum):
    TIMEOUT = "timeout"
    CANCELLED = "cancelled"
    CONNECTION = "connection"
    OTHER = "other"


class TransportError(Exception):
    """Raised by transports when the network exchange fails."""

    def __init__(self, message: str, reason: TransportFailure = TransportFailure.OTHER) -> None:
        super().__init__(message)
        self.reason = reason


class InvalidRequestError(Exception):
    """Raised by transports when a wire request cannot be turned into a network call."""


__all__ = [
    "ClientError",
    "DecodingError",
    "EncodingError",
    "InvalidRequestError",
    "RequestError",
    "RequestErrorKind",
    "ResponseError",
    "TransportError",
    "TransportFailure",
]
