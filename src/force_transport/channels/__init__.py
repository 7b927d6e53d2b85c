"""Request mechanisms the transports delegate to."""

from . import canvas, fetch, jsonp
from .base import HttpRequestModule, RawResponse
from .canvas import CanvasRequest, parse_signed_request
from .fetch import FetchRequest
from .jsonp import JsonpRequest

__all__ = [
    "CanvasRequest",
    "FetchRequest",
    "HttpRequestModule",
    "JsonpRequest",
    "RawResponse",
    "canvas",
    "fetch",
    "jsonp",
    "parse_signed_request",
]
