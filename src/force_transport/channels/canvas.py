"""Canvas request mechanism driven by a parsed signed request."""

from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
from dataclasses import replace
from typing import Any, Mapping

import httpx

from ..environment import resolve_url
from ..errors import AuthenticationError, ParseError, TransportError
from ..logger import BoundLogger, create_logger
from ..types import RequestParams
from .fetch import FetchRequest


def _b64decode(value: str) -> bytes:
    # Accept both the standard and the URL-safe alphabet.
    normalized = value.replace("-", "+").replace("_", "/")
    padded = normalized + "=" * (-len(normalized) % 4)
    try:
        return base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ParseError(f"Invalid base64 segment in signed request: {exc}") from exc


def compute_signature(encoded_envelope: str, consumer_secret: str) -> bytes:
    secret = consumer_secret.encode("utf-8")
    return hmac.new(secret, encoded_envelope.encode("utf-8"), hashlib.sha256).digest()


def parse_signed_request(
    raw: str | Mapping[str, Any],
    consumer_secret: str | None = None,
) -> dict[str, Any]:
    """Decode a ``<signature>.<envelope>`` signed request.

    Both segments are base64; the envelope is JSON. When ``consumer_secret``
    is given the HMAC-SHA256 signature over the encoded envelope is checked.
    Already-parsed mappings are returned as a plain dict.
    """
    if isinstance(raw, Mapping):
        return dict(raw)

    encoded_signature, sep, encoded_envelope = raw.strip().partition(".")
    if not sep or not encoded_signature or not encoded_envelope:
        raise ParseError("Signed request must look like <signature>.<envelope>")

    if consumer_secret:
        expected = compute_signature(encoded_envelope, consumer_secret)
        if not hmac.compare_digest(expected, _b64decode(encoded_signature)):
            raise AuthenticationError("Signed request signature does not match")

    try:
        envelope = json.loads(_b64decode(encoded_envelope).decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ParseError(f"Invalid signed request envelope: {exc}") from exc
    if not isinstance(envelope, dict):
        raise ParseError("Signed request envelope must be a JSON object")
    return envelope


class CanvasRequest:
    def __init__(
        self,
        signed_request: Mapping[str, Any],
        *,
        fetch: FetchRequest | None = None,
        logger: BoundLogger | None = None,
    ) -> None:
        self._signed_request = signed_request
        self._logger = (logger or create_logger()).child("canvas")
        self._fetch = fetch or FetchRequest(logger=self._logger)

    async def __call__(self, params: RequestParams) -> httpx.Response:
        client = self._signed_request.get("client") or {}
        token = client.get("oauthToken")
        if not token:
            raise TransportError("Signed request carries no canvas client context")

        instance_url = (client.get("instanceUrl") or "").rstrip("/")
        headers = dict(params.headers or {})
        headers["Authorization"] = f"Bearer {token}"
        url = resolve_url(params.url, instance_url)
        self._logger.bind(url=url).trace("Canvas request authorised with signed request token")
        return await self._fetch(replace(params, url=url, headers=headers))


def create_request(signed_request: Mapping[str, Any], **kwargs: Any) -> CanvasRequest:
    return CanvasRequest(signed_request, **kwargs)


supported = True

__all__ = [
    "CanvasRequest",
    "compute_signature",
    "create_request",
    "parse_signed_request",
    "supported",
]
