"""Base URL detection for resolving root-relative request URLs."""

from __future__ import annotations

import os
import re
from functools import lru_cache
from urllib.parse import urlparse

BASE_URL_ENV = "LOCATION_BASE_URL"

_API_HOST_PATTERN = re.compile(r"(\w+)\.(?:visual\.force|salesforce)\.com$")


def normalize_api_host(host: str) -> str:
    """Map Visualforce and instance hosts onto the ``<org>.salesforce.com`` API host."""
    match = _API_HOST_PATTERN.search(host)
    if match:
        return f"{match.group(1)}.salesforce.com"
    return host


def base_url_from_origin(origin: str) -> str:
    """Build the base URL for a page served from ``origin`` (URL or bare host)."""
    host = urlparse(origin).netloc if "://" in origin else origin
    host = host.strip().rstrip("/")
    if not host:
        return ""
    return "https://" + normalize_api_host(host)


def detect_base_url(origin: str | None = None) -> str:
    if origin is not None:
        return base_url_from_origin(origin)
    return os.environ.get(BASE_URL_ENV, "")


@lru_cache(maxsize=1)
def default_base_url() -> str:
    return detect_base_url()


def resolve_url(url: str, base_url: str) -> str:
    if url.startswith("/"):
        return base_url + url
    return url


__all__ = [
    "BASE_URL_ENV",
    "base_url_from_origin",
    "default_base_url",
    "detect_base_url",
    "normalize_api_host",
    "resolve_url",
]
