"""Export Pydantic models for convenience."""

from .common import EmptyResponse, HTTPMethod, RawResponse, WireRequest

__all__ = [
    "EmptyResponse",
    "HTTPMethod",
    "RawResponse",
    "WireRequest",
]
