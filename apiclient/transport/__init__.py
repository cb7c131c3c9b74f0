"""Transport implementations."""

from .base import Transport
from .httpx_transport import HttpxTransport

__all__ = ["HttpxTransport", "Transport"]
