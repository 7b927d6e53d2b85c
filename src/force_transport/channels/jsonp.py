"""JSONP request mechanism.

The target endpoint wraps its JSON payload in a call to a callback whose name
is passed in a query parameter. The wrapper is stripped and the payload is
handed back as a regular ``application/json`` response.
"""

from __future__ import annotations

import itertools
import re
import time
from typing import Any

import httpx

from ..errors import ParseError, TransportError
from ..logger import BoundLogger, create_logger
from ..types import RequestParams
from .fetch import FetchRequest

_callback_ids = itertools.count(1)


def _callback_name() -> str:
    return f"_jsonp_{int(time.time() * 1000)}_{next(_callback_ids)}"


def unwrap_jsonp(script: str, callback: str) -> str:
    """Return the JSON text passed to ``callback`` inside ``script``."""
    pattern = re.compile(
        r"^\s*(?:/\*\*/)?\s*" + re.escape(callback) + r"\s*\((.*)\)\s*;?\s*$",
        re.DOTALL,
    )
    match = pattern.match(script)
    if not match:
        raise ParseError(f"JSONP response is not wrapped in {callback}()")
    return match.group(1)


class JsonpRequest:
    def __init__(
        self,
        jsonp_param: str,
        *,
        fetch: FetchRequest | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._jsonp_param = jsonp_param
        self._logger = (logger or create_logger()).child("jsonp")
        self._fetch = fetch or FetchRequest(logger=self._logger)

    async def __call__(self, params: RequestParams) -> httpx.Response:
        if params.method.upper() != "GET":
            raise TransportError(f"JSONP only supports GET requests, got {params.method}")

        callback = _callback_name()
        url = str(httpx.URL(params.url).copy_add_param(self._jsonp_param, callback))
        self._logger.bind(url=params.url).trace("JSONP callback %s", callback)
        response = await self._fetch(
            RequestParams(method="GET", url=url, headers=params.headers, proxy=params.proxy)
        )
        if not response.is_success:
            return response

        payload = unwrap_jsonp(response.text, callback)
        return httpx.Response(
            200,
            headers={"content-type": "application/json"},
            content=payload.encode("utf-8"),
            request=response.request,
        )


def create_request(jsonp_param: str, **kwargs: Any) -> JsonpRequest:
    return JsonpRequest(jsonp_param, **kwargs)


supported = True

__all__ = ["JsonpRequest", "create_request", "supported", "unwrap_jsonp"]
