"""Transports that tunnel requests through an intermediary.

``ProxyTransport`` talks to an AJAX proxy endpoint that reads the real target
from the ``salesforceproxy-endpoint`` header. ``HttpProxyTransport`` keeps
the real target URL and routes the connection through a forward proxy server.
"""

from __future__ import annotations

import random
import time
from typing import Any

import httpx

from ..channels.base import HttpRequestModule
from ..channels.fetch import FetchRequest
from ..environment import default_base_url, resolve_url
from ..logger import LogLevel, create_logger
from ..promise import Callback
from ..streaming import StreamablePromise
from ..types import RequestParams, ResponseResult
from .base import ParamsLike, Transport, dispatch_request

PROXY_ENDPOINT_HEADER = "salesforceproxy-endpoint"


def cache_buster() -> str:
    """``<epoch-millis>.<random digits>`` so the fixed proxy URL is never served from cache."""
    fraction = f"{random.random():.16f}"[2:]
    return f"{int(time.time() * 1000)}.{fraction}"


class ProxyTransport:
    kind: Transport.Kind = "proxy"

    def __init__(
        self,
        proxy_url: str,
        *,
        base_url: str | None = None,
        timeout: float = 60.0,
        http_transport: httpx.AsyncBaseTransport | None = None,
        logger: Any | None = None,
        log_level: LogLevel = "info",
    ) -> None:
        self._proxy_url = proxy_url
        self._base_url = default_base_url() if base_url is None else base_url
        self._logger = create_logger(logger=logger, level=log_level).child("proxy", kind=self.kind)
        self._fetch = FetchRequest(
            timeout=timeout,
            http_transport=http_transport,
            logger=self._logger,
        )

    @property
    def proxy_url(self) -> str:
        return self._proxy_url

    @property
    def base_url(self) -> str:
        return self._base_url

    def build_proxy_params(self, params: ParamsLike) -> RequestParams:
        params = RequestParams.coerce(params)
        url = resolve_url(params.url, self._base_url)
        headers = {
            name: value
            for name, value in (params.headers or {}).items()
            if name.lower() != PROXY_ENDPOINT_HEADER
        }
        headers[PROXY_ENDPOINT_HEADER] = url
        proxy_params = RequestParams(
            method=params.method,
            url=f"{self._proxy_url}?{cache_buster()}",
            headers=headers,
            body=params.body if params.has_body else None,
        )
        self._logger.bind(url=url).trace("Proxying via %s", proxy_params.url)
        return proxy_params

    def http_request(
        self,
        params: ParamsLike,
        callback: Callback | None = None,
    ) -> StreamablePromise[ResponseResult]:
        return dispatch_request(
            self.build_proxy_params(params),
            self._get_http_request_module(),
            callback=callback,
            logger=self._logger,
        )

    def _get_http_request_module(self) -> HttpRequestModule:
        return self._fetch


class HttpProxyTransport:
    kind: Transport.Kind = "http_proxy"

    def __init__(
        self,
        http_proxy: str,
        *,
        base_url: str | None = None,
        timeout: float = 60.0,
        http_transport: httpx.AsyncBaseTransport | None = None,
        logger: Any | None = None,
        log_level: LogLevel = "info",
    ) -> None:
        self._http_proxy = http_proxy
        self._base_url = default_base_url() if base_url is None else base_url
        self._logger = create_logger(logger=logger, level=log_level).child("http_proxy", kind=self.kind)
        self._fetch = FetchRequest(
            timeout=timeout,
            http_transport=http_transport,
            logger=self._logger,
        )

    @property
    def http_proxy(self) -> str:
        return self._http_proxy

    @property
    def base_url(self) -> str:
        return self._base_url

    def build_proxy_params(self, params: ParamsLike) -> RequestParams:
        params = RequestParams.coerce(params)
        proxy_params = RequestParams(
            method=params.method,
            url=resolve_url(params.url, self._base_url),
            headers=dict(params.headers or {}),
            body=params.body if params.has_body else None,
            proxy=self._http_proxy,
        )
        self._logger.bind(url=proxy_params.url).trace("Routing through %s", self._http_proxy)
        return proxy_params

    def http_request(
        self,
        params: ParamsLike,
        callback: Callback | None = None,
    ) -> StreamablePromise[ResponseResult]:
        return dispatch_request(
            self.build_proxy_params(params),
            self._get_http_request_module(),
            callback=callback,
            logger=self._logger,
        )

    def _get_http_request_module(self) -> HttpRequestModule:
        return self._fetch


__all__ = ["HttpProxyTransport", "PROXY_ENDPOINT_HEADER", "ProxyTransport", "cache_buster"]
