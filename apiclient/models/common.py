"""Wire-level Pydantic models shared across modules."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class HTTPMethod(str, Enum):
    """Request methods understood by the pipeline."""

    GET = "GET"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"
    TRACE = "TRACE"
    PUT = "PUT"
    DELETE = "DELETE"
    POST = "POST"
    PATCH = "PATCH"
    CONNECT = "CONNECT"


class EmptyResponse(BaseModel):
    """Result type for endpoints whose payload is ignored."""

    model_config = ConfigDict(frozen=True)


class WireRequest(BaseModel):
    """Fully resolved request handed to a transport.

    Hooks derive modified copies through ``model_copy(update=...)``.
    """

    model_config = ConfigDict(frozen=True)

    url: str
    method: HTTPMethod = HTTPMethod.GET
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes | None = None


class RawResponse(BaseModel):
    """Undecoded result of a transport round trip."""

    model_config = ConfigDict(frozen=True)

    status_code: int
    headers: dict[str, str] = Field(default_factory=dict)
    content: bytes = b""
    url: str | None = None
