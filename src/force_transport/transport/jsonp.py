"""Transport that delivers GET requests through JSONP callbacks."""

from __future__ import annotations

from typing import Any

import httpx

from ..channels import jsonp
from ..channels.base import HttpRequestModule
from ..channels.fetch import FetchRequest
from ..logger import LogLevel, create_logger
from ..promise import Callback
from ..streaming import StreamablePromise
from ..types import ResponseResult
from .base import ParamsLike, Transport, dispatch_request


class JsonpTransport:
    kind: Transport.Kind = "jsonp"
    supported: bool = jsonp.supported

    def __init__(
        self,
        jsonp_param: str,
        *,
        timeout: float = 60.0,
        http_transport: httpx.AsyncBaseTransport | None = None,
        logger: Any | None = None,
        log_level: LogLevel = "info",
    ) -> None:
        self._jsonp_param = jsonp_param
        self._logger = create_logger(logger=logger, level=log_level).child("jsonp", kind=self.kind)
        self._fetch = FetchRequest(
            timeout=timeout,
            http_transport=http_transport,
            logger=self._logger,
        )

    @property
    def jsonp_param(self) -> str:
        return self._jsonp_param

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
        return jsonp.create_request(self._jsonp_param, fetch=self._fetch, logger=self._logger)


__all__ = ["JsonpTransport"]
