"""httpx-backed transport."""

from __future__ import annotations

import logging

import httpx

from apiclient.errors import InvalidRequestError, TransportError, TransportFailure
from apiclient.models import RawResponse, WireRequest

logger = logging.getLogger(__name__)

# Requests httpx refuses to build or put on the wire.
_INVALID_REQUEST_ERRORS = (httpx.InvalidURL, httpx.UnsupportedProtocol, httpx.LocalProtocolError)


class HttpxTransport:
    """Reusable async transport over ``httpx.AsyncClient``."""

    def __init__(
        self,
        *,
        timeout: float = 10.0,
        verify: bool = True,
        follow_redirects: bool = True,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            verify=verify,
            follow_redirects=follow_redirects,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def perform(self, request: WireRequest) -> RawResponse:
        target = f"{request.method.value} {request.url}"
        logger.debug("%s (%d body bytes)", target, len(request.body or b""))
        try:
            response = await self._client.request(
                request.method.value,
                request.url,
                headers=request.headers,
                content=request.body,
            )
        except _INVALID_REQUEST_ERRORS as exc:
            raise InvalidRequestError(f"Cannot send {target}: {exc}") from exc
        except httpx.TimeoutException as exc:
            raise TransportError(f"{target} timed out: {exc}", TransportFailure.TIMEOUT) from exc
        except httpx.NetworkError as exc:
            raise TransportError(f"{target} failed: {exc}", TransportFailure.CONNECTION) from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"{target} failed: {exc}") from exc

        return RawResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            content=response.content,
            url=str(response.url),
        )
