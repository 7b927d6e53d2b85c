"""Default request mechanism built on top of httpx."""

from __future__ import annotations

from typing import Any

import httpx

from ..errors import ConnectionError
from ..logger import BoundLogger, create_logger
from ..types import RequestParams


class FetchRequest:
    """Sends one request per call with a short-lived ``httpx.AsyncClient``."""

    def __init__(
        self,
        *,
        timeout: float = 60.0,
        http_transport: httpx.AsyncBaseTransport | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._timeout = timeout
        self._http_transport = http_transport
        self._logger = (logger or create_logger()).child("fetch")

    @property
    def timeout(self) -> float:
        return self._timeout

    async def __call__(self, params: RequestParams) -> httpx.Response:
        log = self._logger.bind(url=params.url)
        client_kwargs: dict[str, Any] = {"timeout": httpx.Timeout(self._timeout)}
        if self._http_transport is not None:
            client_kwargs["transport"] = self._http_transport
            if params.proxy:
                log.trace("Custom transport in use, ignoring proxy %s", params.proxy)
        elif params.proxy:
            client_kwargs["proxy"] = params.proxy

        try:
            async with httpx.AsyncClient(**client_kwargs) as client:
                response = await client.request(
                    params.method,
                    params.url,
                    headers=dict(params.headers or {}),
                    content=params.body,
                )
        except httpx.TimeoutException as exc:
            raise ConnectionError(f"HTTP request timeout after {self._timeout}s") from exc
        except httpx.RequestError as exc:
            raise ConnectionError(f"Cannot connect to {params.url}: {exc}") from exc

        log.trace("fetch status=%s bytes=%d", response.status_code, len(response.content))
        return response


__all__ = ["FetchRequest"]
