"""Common transport abstractions and the shared dispatch routine."""

from __future__ import annotations

import asyncio
from typing import Any, Literal, Mapping, Protocol

import httpx

from ..channels.base import HttpRequestModule, RawResponse
from ..channels.fetch import FetchRequest
from ..errors import HttpError, ParseError, RequestCancelledError
from ..logger import BoundLogger, LogLevel, create_logger
from ..promise import Callback, Deferred
from ..streaming import LazyRequest, StreamablePromise, streamify
from ..types import RequestParams, ResponseResult

TransportKind = Literal["base", "jsonp", "canvas", "proxy", "http_proxy"]

ParamsLike = RequestParams | Mapping[str, Any]


class Transport(Protocol):
    Kind = TransportKind

    @property
    def kind(self) -> TransportKind: ...

    def http_request(
        self,
        params: ParamsLike,
        callback: Callback | None = None,
    ) -> StreamablePromise[ResponseResult]: ...


def read_body(response: RawResponse) -> Any:
    """Decode JSON when the content-type says so, otherwise return the text."""
    content_type = response.headers.get("content-type") or ""
    if "application/json" in content_type:
        try:
            return response.json()
        except ValueError as exc:
            raise ParseError(f"Invalid JSON response: {exc}") from exc
    return response.text


def dispatch_request(
    params: ParamsLike,
    request_module: HttpRequestModule,
    *,
    callback: Callback | None = None,
    logger: BoundLogger | None = None,
) -> StreamablePromise[ResponseResult]:
    """Send ``params`` through ``request_module`` and normalize the outcome.

    Nothing is sent until the returned promise is consumed or ``stream()`` is
    called; the request task is then created once and shared by the whole
    continuation chain. ``stream()`` returns that ``asyncio.Task``.

    Must be called from a running event loop.
    """
    params = RequestParams.coerce(params)
    log = (logger or create_logger()).bind(method=params.method, url=params.url)
    deferred: Deferred[ResponseResult] = Deferred()

    async def send() -> None:
        try:
            log.debug("HTTP request sent")
            response = await request_module(params)
            log.debug("HTTP response status=%s", response.status_code)
            if not response.is_success:
                raise HttpError(
                    response.status_code,
                    response.reason_phrase,
                    headers=response.headers,
                )
            await response.aread()
            deferred.resolve(
                ResponseResult(
                    headers=response.headers,
                    status_code=response.status_code,
                    body=read_body(response),
                )
            )
        except Exception as exc:
            log.warn("HTTP request failed: %s", exc)
            deferred.reject(exc)

    def on_task_done(task: asyncio.Task[None]) -> None:
        if task.cancelled():
            deferred.reject(RequestCancelledError(f"Request to {params.url} was cancelled"))

    def create_request() -> asyncio.Task[None]:
        task = asyncio.ensure_future(send())
        task.add_done_callback(on_task_done)
        return task

    return streamify(deferred.promise, LazyRequest(create_request)).then_call(callback)


class BaseTransport:
    """Direct transport: requests go straight to their target URL."""

    kind: Transport.Kind = "base"

    def __init__(
        self,
        *,
        timeout: float = 60.0,
        http_transport: httpx.AsyncBaseTransport | None = None,
        logger: Any | None = None,
        log_level: LogLevel = "info",
    ) -> None:
        self._logger = create_logger(logger=logger, level=log_level).child("base", kind=self.kind)
        self._fetch = FetchRequest(
            timeout=timeout,
            http_transport=http_transport,
            logger=self._logger,
        )

    def http_request(
        self,
        params: ParamsLike,
        callback: Callback | None = None,
    ) -> StreamablePromise[ResponseResult]:
        return dispatch_request(
            params,
            self._get_http_request_module(),
            callback=callback,
            logger=self._logger,
        )

    def _get_http_request_module(self) -> HttpRequestModule:
        return self._fetch


__all__ = [
    "BaseTransport",
    "ParamsLike",
    "Transport",
    "TransportKind",
    "dispatch_request",
    "read_body",
]
