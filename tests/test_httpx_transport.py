"""Tests for the httpx transport adapter."""

from __future__ import annotations

from collections.abc import Callable

import httpx
import pytest
from pydantic import BaseModel

from apiclient.config import BasicAuth, ClientConfig
from apiclient.core.body import FormField, MultipartFormBody
from apiclient.core.client import Client
from apiclient.core.request import Request
from apiclient.core.validation import require_success
from apiclient.errors import (
    InvalidRequestError,
    RequestError,
    RequestErrorKind,
    TransportError,
    TransportFailure,
)
from apiclient.models import HTTPMethod, WireRequest
from apiclient.transport import HttpxTransport, Transport


class Item(BaseModel):
    name: str
    quantity: float


def make_transport(handler: Callable[[httpx.Request], httpx.Response]) -> HttpxTransport:
    return HttpxTransport(client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))


def test_httpx_transport_satisfies_protocol() -> None:
    assert isinstance(make_transport(lambda request: httpx.Response(200)), Transport)


@pytest.mark.asyncio
async def test_perform_sends_wire_request_verbatim() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, headers={"X-Reply": "yes"}, content=b"created")

    transport = make_transport(handler)
    response = await transport.perform(
        WireRequest(
            url="https://api.example.com/items?x=1",
            method=HTTPMethod.PUT,
            headers={"Content-Type": "text/plain", "X-Custom": "1"},
            body=b"payload",
        )
    )
    await transport.close()

    assert response.status_code == 201
    assert response.content == b"created"
    assert response.headers["x-reply"] == "yes"
    assert response.url == "https://api.example.com/items?x=1"
    assert seen[0].method == "PUT"
    assert seen[0].headers["content-type"] == "text/plain"
    assert seen[0].headers["x-custom"] == "1"
    assert seen[0].content == b"payload"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("raised", "reason"),
    [
        (httpx.ConnectTimeout("slow"), TransportFailure.TIMEOUT),
        (httpx.ReadTimeout("slow"), TransportFailure.TIMEOUT),
        (httpx.ConnectError("refused"), TransportFailure.CONNECTION),
        (httpx.RemoteProtocolError("garbled"), TransportFailure.OTHER),
    ],
)
async def test_network_failures_become_transport_errors(raised: Exception, reason: TransportFailure) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise raised

    with pytest.raises(TransportError) as excinfo:
        await make_transport(handler).perform(WireRequest(url="https://api.example.com"))

    assert excinfo.value.reason is reason
    assert excinfo.value.__cause__ is raised


@pytest.mark.asyncio
async def test_malformed_url_is_invalid_request() -> None:
    transport = make_transport(lambda request: httpx.Response(200))

    with pytest.raises(InvalidRequestError):
        await transport.perform(WireRequest(url="https://api.example.com/\nitems"))


@pytest.mark.asyncio
async def test_client_over_httpx_end_to_end() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"name": "widget", "quantity": 150})

    config = ClientConfig(
        base_url="https://api.example.com",
        validate=require_success,
        default_headers={"accept": "application/json"},
        basic_auth=BasicAuth("svc", "secret"),
    )
    async with Client(config, make_transport(handler)) as client:
        item = await client.send(
            Request(
                method=HTTPMethod.POST,
                path="/uploads",
                body=MultipartFormBody([FormField("item_id", "item-1")], boundary="B"),
                response_type=Item,
            )
        )

    assert item == Item(name="widget", quantity=150)
    sent = seen[0]
    assert str(sent.url) == "https://api.example.com/uploads"
    assert sent.headers["content-type"] == "multipart/form-data; boundary=B"
    assert sent.headers["authorization"].startswith("Basic ")
    assert sent.headers["accept"] == "application/json"
    assert sent.content == b'--B\r\nContent-Disposition: form-data; name="item_id"\r\n\r\nitem-1\r\n--B--'


@pytest.mark.asyncio
async def test_client_classifies_httpx_timeout() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow")

    config = ClientConfig(base_url="https://api.example.com", validate=require_success)
    async with Client(config, make_transport(handler)) as client:
        with pytest.raises(RequestError) as excinfo:
            await client.send(Request())

    assert excinfo.value.kind is RequestErrorKind.TRANSPORT
