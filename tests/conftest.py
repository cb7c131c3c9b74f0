"""Shared stubs for pipeline tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from typing import Any

import pytest

from apiclient.config import ClientConfig
from apiclient.core.codecs import JSONDecoder
from apiclient.core.validation import require_success
from apiclient.models import RawResponse, WireRequest


class StubTransport:
    """Returns a canned response (or raises) and records every request."""

    def __init__(
        self,
        response: RawResponse | None = None,
        *,
        error: BaseException | None = None,
    ) -> None:
        self.response = response or RawResponse(status_code=200, content=b"{}")
        self.error = error
        self.requests: list[WireRequest] = []
        self.closed = False

    async def perform(self, request: WireRequest) -> RawResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self) -> None:
        self.closed = True


class SequenceTransport(StubTransport):
    """Plays back one outcome per call, in order."""

    def __init__(self, outcomes: list[RawResponse | BaseException]) -> None:
        super().__init__()
        self.outcomes = list(outcomes)

    async def perform(self, request: WireRequest) -> RawResponse:
        self.requests.append(request)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class BlockingTransport(StubTransport):
    """Never completes until cancelled; remembers whether it was."""

    def __init__(self) -> None:
        super().__init__()
        self.started = asyncio.Event()
        self.was_cancelled = False

    async def perform(self, request: WireRequest) -> RawResponse:
        self.requests.append(request)
        self.started.set()
        try:
            await asyncio.Event().wait()
        except asyncio.CancelledError:
            self.was_cancelled = True
            raise
        raise AssertionError("unreachable")


class RecordingDecoder:
    """Counts decode calls before delegating to JSONDecoder."""

    def __init__(self) -> None:
        self.calls = 0
        self._inner = JSONDecoder()

    def decode(self, data: bytes, response_type: Any) -> Any:
        self.calls += 1
        return self._inner.decode(data, response_type)


class RecordingValidator:
    """Counts validate calls; optionally delegates to another validator."""

    def __init__(self, inner: Callable[[bytes, int, Mapping[str, str]], None] = require_success) -> None:
        self.calls = 0
        self._inner = inner

    def __call__(self, content: bytes, status_code: int, headers: Mapping[str, str]) -> None:
        self.calls += 1
        self._inner(content, status_code, headers)


def json_response(content: bytes, status_code: int = 200) -> RawResponse:
    return RawResponse(
        status_code=status_code,
        headers={"content-type": "application/json"},
        content=content,
        url="https://api.example.com",
    )


@pytest.fixture
def decoder() -> RecordingDecoder:
    return RecordingDecoder()


@pytest.fixture
def validator() -> RecordingValidator:
    return RecordingValidator()


@pytest.fixture
def config(decoder: RecordingDecoder, validator: RecordingValidator) -> ClientConfig:
    return ClientConfig(
        base_url="https://api.example.com",
        validate=validator,
        default_headers={"Accept": "application/json"},
        decoder=decoder,
    )
