"""Header merging for outgoing requests.

Keys are compared case-sensitively here; case-insensitive handling is left to
the transport.
"""

from __future__ import annotations

import base64
from collections.abc import Mapping

AUTHORIZATION = "Authorization"


def basic_auth_header(username: str, password: str) -> str:
    """Return the ``Authorization`` value for HTTP basic authentication."""

    token = base64.b64encode(f"{username}:{password}".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


def resolve_headers(
    default_headers: Mapping[str, str] | None,
    request_headers: Mapping[str, str] | None,
    body_headers: Mapping[str, str] | None,
    authorization: str | None = None,
) -> dict[str, str]:
    """Merge header sources; later sources win on collision.

    Precedence, lowest to highest: client defaults, request headers, headers
    mandated by the body, computed ``Authorization``.
    """

    merged: dict[str, str] = {}
    for source in (default_headers, request_headers, body_headers):
        if source:
            merged.update(source)
    if authorization is not None:
        merged[AUTHORIZATION] = authorization
    return merged


__all__ = ["AUTHORIZATION", "basic_auth_header", "resolve_headers"]
