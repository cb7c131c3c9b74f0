"""Cold, cancellable single-value stream over the request pipeline."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from typing import Generic, TypeVar

from apiclient.errors import ClientError

ValueT = TypeVar("ValueT")

RetryPredicate = Callable[[ClientError], bool]


def _always(_: ClientError) -> bool:
    return True


class Subscription:
    """Handle for one running subscription."""

    def __init__(self, task: asyncio.Task[None]) -> None:
        self._task = task

    @property
    def done(self) -> bool:
        return self._task.done()

    @property
    def cancelled(self) -> bool:
        return self._task.cancelled()

    def cancel(self) -> None:
        """Abort the in-flight call. Nothing is delivered afterwards."""

        self._task.cancel()

    async def wait(self) -> None:
        """Wait for the subscription to finish.

        Returns quietly if it was cancelled; re-raises an error that had no
        ``on_error`` handler to go to.
        """

        try:
            await self._task
        except asyncio.CancelledError:
            current = asyncio.current_task()
            if current is not None and current.cancelling():
                raise


class RequestPublisher(Generic[ValueT]):
    """Runs the wrapped call once per subscription.

    Every subscription (``async for`` or ``subscribe``) starts a fresh call and
    receives at most one value or one ``ClientError`` before completing.
    """

    def __init__(
        self,
        execute: Callable[[], Awaitable[ValueT]],
        *,
        retry_when: RetryPredicate | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._execute = execute
        self._retry_when = retry_when
        self._logger = logger or logging.getLogger(__name__)

    def retry(self, when: RetryPredicate = _always) -> RequestPublisher[ValueT]:
        """Return a publisher that re-subscribes once if the first attempt fails."""

        return RequestPublisher(self._execute, retry_when=when, logger=self._logger)

    async def _run(self) -> ValueT:
        try:
            return await self._execute()
        except ClientError as exc:
            if self._retry_when is None or not self._retry_when(exc):
                raise
            self._logger.info("Re-subscribing after failure: %s", exc)
        return await self._execute()

    async def first(self) -> ValueT:
        """Subscribe and await the single value."""

        return await self._run()

    def __aiter__(self) -> AsyncIterator[ValueT]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[ValueT]:
        yield await self._run()

    def subscribe(
        self,
        on_next: Callable[[ValueT], object],
        on_error: Callable[[ClientError], object] | None = None,
        on_complete: Callable[[], object] | None = None,
    ) -> Subscription:
        """Start the call on the running event loop and push its outcome to callbacks."""

        async def deliver() -> None:
            try:
                value = await self._run()
            except ClientError as exc:
                if on_error is None:
                    raise
                on_error(exc)
                return
            on_next(value)
            if on_complete is not None:
                on_complete()

        task = asyncio.get_running_loop().create_task(deliver(), name="request-subscription")
        return Subscription(task)


__all__ = ["RequestPublisher", "Subscription"]
