"""Pick a transport for the current environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Mapping

import httpx

from .channels.canvas import parse_signed_request
from .logger import LOG_LEVEL_PRIORITY, LogLevel, create_logger
from .transport import (
    BaseTransport,
    CanvasTransport,
    HttpProxyTransport,
    JsonpTransport,
    ProxyTransport,
    Transport,
)

PROXY_URL_ENV = "FORCE_PROXY_URL"
HTTP_PROXY_ENV = "FORCE_HTTP_PROXY"
TIMEOUT_ENV = "FORCE_TIMEOUT"
LOG_LEVEL_ENV = "FORCE_LOG_LEVEL"


@dataclass
class TransportOptions:
    signed_request: Mapping[str, Any] | str | None = None
    consumer_secret: str | None = None
    proxy_url: str | None = None
    http_proxy: str | None = None
    jsonp_param: str | None = None
    base_url: str | None = None
    timeout: float = 60.0
    http_transport: httpx.AsyncBaseTransport | None = None
    logger: object | None = None
    log_level: LogLevel = "info"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> "TransportOptions":
        env = os.environ if environ is None else environ
        values: dict[str, Any] = {
            "proxy_url": env.get(PROXY_URL_ENV) or None,
            "http_proxy": env.get(HTTP_PROXY_ENV) or None,
        }

        raw_timeout = env.get(TIMEOUT_ENV)
        if raw_timeout:
            try:
                values["timeout"] = float(raw_timeout)
            except ValueError as exc:
                raise ValueError(f"{TIMEOUT_ENV} must be a number, got {raw_timeout!r}") from exc

        raw_level = env.get(LOG_LEVEL_ENV)
        if raw_level:
            level = raw_level.strip().lower()
            if level not in LOG_LEVEL_PRIORITY:
                raise ValueError(f"{LOG_LEVEL_ENV} must be one of {sorted(LOG_LEVEL_PRIORITY)}")
            values["log_level"] = level

        values.update(overrides)
        return cls(**values)


def create_transport(options: TransportOptions | None = None, **kwargs: Any) -> Transport:
    """Build the transport matching ``options``.

    Canvas wins when a signed request is present, then the AJAX proxy, the
    HTTP proxy and JSONP; otherwise requests go out directly.
    """
    if options is None:
        options = TransportOptions(**kwargs)

    logger = create_logger(logger=options.logger, level=options.log_level)
    common: dict[str, Any] = {
        "timeout": options.timeout,
        "http_transport": options.http_transport,
        "logger": logger,
    }

    if options.signed_request is not None and CanvasTransport.supported:
        signed_request = parse_signed_request(options.signed_request, options.consumer_secret)
        logger.info("Using canvas transport")
        return CanvasTransport(signed_request, **common)
    if options.proxy_url:
        logger.info("Using AJAX proxy transport via %s", options.proxy_url)
        return ProxyTransport(options.proxy_url, base_url=options.base_url, **common)
    if options.http_proxy:
        logger.info("Using HTTP proxy transport via %s", options.http_proxy)
        return HttpProxyTransport(options.http_proxy, base_url=options.base_url, **common)
    if options.jsonp_param and JsonpTransport.supported:
        logger.info("Using JSONP transport")
        return JsonpTransport(options.jsonp_param, **common)
    logger.debug("Using direct transport")
    return BaseTransport(**common)


__all__ = ["TransportOptions", "create_transport"]
