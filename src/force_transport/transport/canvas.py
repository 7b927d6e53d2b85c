"""Transport that authorises requests with a canvas signed request."""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Mapping

import httpx

from ..channels import canvas
from ..channels.base import HttpRequestModule
from ..channels.fetch import FetchRequest
from ..logger import LogLevel, create_logger
from ..promise import Callback
from ..streaming import StreamablePromise
from ..types import ResponseResult
from .base import ParamsLike, Transport, dispatch_request


def _freeze(value: Any) -> Any:
    """Read-only copy of a parsed JSON payload, nested values included."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: _freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(item) for item in value)
    return value


class CanvasTransport:
    kind: Transport.Kind = "canvas"
    supported: bool = canvas.supported

    def __init__(
        self,
        signed_request: Mapping[str, Any],
        *,
        timeout: float = 60.0,
        http_transport: httpx.AsyncBaseTransport | None = None,
        logger: Any | None = None,
        log_level: LogLevel = "info",
    ) -> None:
        self._signed_request = _freeze(signed_request)
        self._logger = create_logger(logger=logger, level=log_level).child("canvas", kind=self.kind)
        self._fetch = FetchRequest(
            timeout=timeout,
            http_transport=http_transport,
            logger=self._logger,
        )

    @property
    def signed_request(self) -> Mapping[str, Any]:
        return self._signed_request

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
        return canvas.create_request(self._signed_request, fetch=self._fetch, logger=self._logger)


__all__ = ["CanvasTransport"]
