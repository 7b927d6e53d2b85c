"""Expose the in-flight request behind a promise without starting it early."""

from __future__ import annotations

from typing import Any, Callable, Generator, Generic, TypeVar

from .promise import OnFulfilled, OnRejected, Promise

T = TypeVar("T")
R = TypeVar("R")


class LazyRequest(Generic[R]):
    """Zero-argument factory that calls ``create`` at most once."""

    def __init__(self, create: Callable[[], R]) -> None:
        self._create = create
        self._created = False
        self._request: R | None = None

    @property
    def created(self) -> bool:
        return self._created

    def __call__(self) -> R:
        if not self._created:
            self._created = True
            self._request = self._create()
        return self._request  # type: ignore[return-value]


class StreamablePromise(Promise[T]):
    """Promise whose whole continuation chain can reach the underlying request.

    ``stream()`` returns the request object. Consuming the chain (``then``,
    ``catch``, ``then_call`` or ``await``) creates the request first, so work
    starts as soon as anybody depends on the outcome.
    """

    def __init__(self, promise: Promise[T], factory: Callable[[], Any]) -> None:
        super().__init__(promise.future)
        self._factory = factory

    def stream(self) -> Any:
        return self._factory()

    def then(
        self,
        on_fulfilled: OnFulfilled | None = None,
        on_rejected: OnRejected | None = None,
    ) -> "StreamablePromise[Any]":
        self._factory()
        return streamify(super().then(on_fulfilled, on_rejected), self._factory)

    def __await__(self) -> Generator[Any, None, T]:
        self._factory()
        return super().__await__()


def streamify(promise: Promise[T], factory: Callable[[], Any]) -> StreamablePromise[T]:
    return StreamablePromise(promise, factory)


__all__ = ["LazyRequest", "StreamablePromise", "streamify"]
