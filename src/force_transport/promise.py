"""Deferred results with then-style continuations on top of asyncio futures."""

from __future__ import annotations

import asyncio
import inspect
from typing import Any, Callable, Generator, Generic, Optional, TypeVar

T = TypeVar("T")

OnFulfilled = Callable[[Any], Any]
OnRejected = Callable[[BaseException], Any]
Callback = Callable[[Optional[BaseException], Any], Any]


class Promise(Generic[T]):
    """A pending value that supports continuation chaining and ``await``."""

    def __init__(self, future: asyncio.Future[T]) -> None:
        self._future = future

    @property
    def future(self) -> asyncio.Future[T]:
        return self._future

    def then(
        self,
        on_fulfilled: OnFulfilled | None = None,
        on_rejected: OnRejected | None = None,
    ) -> "Promise[Any]":
        """Attach continuations and return a promise for their outcome.

        A handler may return a plain value or an awaitable; a missing handler
        passes the value (or the error) through unchanged.
        """
        chained = asyncio.ensure_future(_settle(self._future, on_fulfilled, on_rejected))
        return Promise(chained)

    def catch(self, on_rejected: OnRejected) -> "Promise[Any]":
        return self.then(None, on_rejected)

    def then_call(self, callback: Callback | None = None) -> "Promise[T]":
        """Invoke an error-first ``callback(err, result)`` once settled.

        Returns this promise so callers can keep chaining on the original value.
        """
        if callback is not None:
            self.then(
                lambda value: self._invoke_callback(callback, None, value),
                lambda exc: self._invoke_callback(callback, exc, None),
            )
        return self

    def _invoke_callback(self, callback: Callback, err: BaseException | None, value: Any) -> None:
        # Nobody awaits the continuation, so report failures to the loop right away.
        try:
            callback(err, value)
        except Exception as exc:
            self._future.get_loop().call_exception_handler(
                {
                    "message": "Error-first callback raised an exception",
                    "exception": exc,
                    "future": self._future,
                }
            )

    def done(self) -> bool:
        return self._future.done()

    def __await__(self) -> Generator[Any, None, T]:
        return self._future.__await__()


class Deferred(Generic[T]):
    """Owner side of a :class:`Promise`; settles it exactly once."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        loop = loop or asyncio.get_running_loop()
        self._future: asyncio.Future[T] = loop.create_future()
        self.promise: Promise[T] = Promise(self._future)

    def resolve(self, value: T) -> None:
        if not self._future.done():
            self._future.set_result(value)

    def reject(self, exc: BaseException) -> None:
        if not self._future.done():
            self._future.set_exception(exc)


async def _settle(
    source: asyncio.Future[Any],
    on_fulfilled: OnFulfilled | None,
    on_rejected: OnRejected | None,
) -> Any:
    # Shielded so cancelling one continuation leaves the shared source intact.
    try:
        value = await asyncio.shield(source)
    except Exception as exc:
        if on_rejected is None:
            raise
        result = on_rejected(exc)
    else:
        if on_fulfilled is None:
            return value
        result = on_fulfilled(value)

    if inspect.isawaitable(result):
        result = await result
    return result


__all__ = ["Callback", "Deferred", "Promise"]
