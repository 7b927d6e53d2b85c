"""Custom exceptions raised by the transport layer."""

from __future__ import annotations

from typing import Any, Mapping


class TransportError(Exception):
    """Base error for all transport failures."""

    def __init__(self, message: str, *, context: Any | None = None) -> None:
        super().__init__(message)
        self.context = context


class ConnectionError(TransportError):
    """Raised when the underlying request never produced a response."""


class HttpError(TransportError):
    """Raised when the response status is outside the 2xx range."""

    def __init__(
        self,
        status_code: int,
        status_text: str,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(
            f"Network response was not ok {status_text}".rstrip(),
            context={"status_code": status_code},
        )
        self.status_code = status_code
        self.status_text = status_text
        self.headers = headers or {}


class ParseError(TransportError):
    """Raised when a response or payload cannot be parsed."""


class AuthenticationError(TransportError):
    """Raised when a signed request fails verification."""


class RequestCancelledError(TransportError):
    """Raised when the in-flight request is cancelled before it settles."""


__all__ = [
    "AuthenticationError",
    "ConnectionError",
    "HttpError",
    "ParseError",
    "RequestCancelledError",
    "TransportError",
]
