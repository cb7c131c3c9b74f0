"""Ready-made response validators."""

from __future__ import annotations

from collections.abc import Mapping


class UnacceptableStatusCode(Exception):
    """Raised by ``require_success`` for non-2xx responses."""

    def __init__(self, status_code: int, content: bytes = b"") -> None:
        super().__init__(f"Unacceptable status code {status_code}")
        self.status_code = status_code
        self.content = content


def require_success(content: bytes, status_code: int, headers: Mapping[str, str]) -> None:
    """Accept 2xx responses only."""

    if not 200 <= status_code < 300:
        raise UnacceptableStatusCode(status_code, content)


__all__ = ["UnacceptableStatusCode", "require_success"]
