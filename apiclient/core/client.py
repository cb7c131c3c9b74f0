"""Typed request pipeline shared by both delivery models."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from apiclient.errors import (
    ClientError,
    DecodingError,
    EncodingError,
    InvalidRequestError,
    RequestError,
    RequestErrorKind,
    ResponseError,
    TransportError,
)
from apiclient.models import RawResponse, WireRequest

from .headers import resolve_headers
from .publisher import RequestPublisher
from .request import Request, ResponseT

if TYPE_CHECKING:
    from apiclient.config import ClientConfig
    from apiclient.transport import Transport

DEFAULT_LOGGER_NAME = "apiclient"


def _cancelled_by_caller() -> bool:
    task = asyncio.current_task()
    return task is not None and task.cancelling() > 0


class Client:
    """Resolves request descriptors against a shared configuration.

    The client keeps no per-call state: every call builds its own
    ``WireRequest``, so one instance can serve any number of concurrent calls.
    """

    def __init__(
        self,
        config: ClientConfig,
        transport: Transport | None = None,
        *,
        logger: logging.Logger | None = None,
    ) -> None:
        if transport is None:
            from apiclient.transport import HttpxTransport

            transport = HttpxTransport()
        self.config = config
        self.transport = transport
        self._logger = logger or logging.getLogger(DEFAULT_LOGGER_NAME)

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.close()

    async def send(self, request: Request[ResponseT]) -> ResponseT:
        """Perform ``request`` and return its typed result.

        Raises a ``ClientError`` subclass on failure. Cancelling the awaiting
        task aborts the transport call.
        """

        return await self._execute(request)

    def publisher(self, request: Request[ResponseT]) -> RequestPublisher[ResponseT]:
        """Return a cold publisher; nothing is sent until it is subscribed to."""

        return RequestPublisher(lambda: self._execute(request), logger=self._logger)

    async def _execute(self, request: Request[ResponseT]) -> ResponseT:
        wire = self.build_wire_request(request)
        try:
            response = await self._perform(wire)
            self._validate(response)
            return self._decode(request, response)
        except ClientError as exc:
            self._logger.warning("%s %s failed: %s", wire.method.value, wire.url, exc)
            raise

    def build_wire_request(self, request: Request[Any]) -> WireRequest:
        """Resolve URL, body and headers, then apply the prepare hooks."""

        url = self.config.base_url
        if request.path:
            url = f"{url}{request.path}"

        try:
            body = request.resolve_body()
            content: bytes | None = None
            body_headers: Any = None
            if body is not None and not getattr(body, "is_empty", False):
                content = body.encode()
                body_headers = getattr(body, "headers", None)
        except EncodingError as exc:
            self._logger.warning("%s %s not sent: %s", request.method.value, url, exc)
            raise
        except Exception as exc:
            self._logger.warning("%s %s not sent: body encoding failed: %s", request.method.value, url, exc)
            raise EncodingError(exc) from exc

        wire = WireRequest(
            url=url,
            method=request.method,
            headers=resolve_headers(
                self.config.default_headers,
                request.headers,
                body_headers,
                self.config.authorization,
            ),
            body=content,
        )

        try:
            hooked = self.config.prepare(request.prepare(wire))
            if not isinstance(hooked, WireRequest):
                raise TypeError(f"prepare hook returned {type(hooked).__name__}, expected WireRequest")
            # model_copy(update=...) skips validation
            wire = WireRequest(**dict(hooked))
        except Exception as exc:
            self._logger.warning("%s %s not sent: prepare hook failed: %s", request.method.value, url, exc)
            raise RequestError(RequestErrorKind.INVALID_REQUEST, exc) from exc

        self._logger.debug(
            "Request: %s %s headers=%s body=%s",
            wire.method.value,
            wire.url,
            sorted(wire.headers),
            body if content is not None else None,
        )
        return wire

    async def _perform(self, wire: WireRequest) -> RawResponse:
        try:
            response = await self.transport.perform(wire)
        except asyncio.CancelledError as exc:
            if _cancelled_by_caller():
                self._logger.debug("%s %s cancelled", wire.method.value, wire.url)
                raise
            raise RequestError(RequestErrorKind.TRANSPORT, exc) from exc
        except InvalidRequestError as exc:
            raise RequestError(RequestErrorKind.INVALID_REQUEST, exc) from exc
        except TransportError as exc:
            raise RequestError(RequestErrorKind.TRANSPORT, exc) from exc
        except Exception as exc:
            raise RequestError(RequestErrorKind.UNKNOWN, exc) from exc

        self._logger.debug(
            "Response: %s %s status=%s bytes=%d",
            wire.method.value,
            wire.url,
            response.status_code,
            len(response.content),
        )
        return response

    def _validate(self, response: RawResponse) -> None:
        try:
            self.config.validate(response.content, response.status_code, response.headers)
        except Exception as exc:
            raise ResponseError(exc) from exc

    def _decode(self, request: Request[ResponseT], response: RawResponse) -> ResponseT:
        try:
            if request.transform is not None:
                return request.transform(response.content, response)
            return self.config.decoder.decode(response.content, request.response_type)
        except Exception as exc:
            raise DecodingError(exc) from exc


__all__ = ["Client"]
