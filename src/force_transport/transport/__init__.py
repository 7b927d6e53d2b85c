"""Transport implementations exposed to users."""

from .base import BaseTransport, Transport, TransportKind, dispatch_request
from .canvas import CanvasTransport
from .jsonp import JsonpTransport
from .proxy import HttpProxyTransport, ProxyTransport

__all__ = [
    "BaseTransport",
    "CanvasTransport",
    "HttpProxyTransport",
    "JsonpTransport",
    "ProxyTransport",
    "Transport",
    "TransportKind",
    "dispatch_request",
]
