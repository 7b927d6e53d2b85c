"""Public surface for the force-transport package."""

from .channels.canvas import parse_signed_request
from .environment import default_base_url, detect_base_url, normalize_api_host
from .errors import (
    AuthenticationError,
    ConnectionError,
    HttpError,
    ParseError,
    RequestCancelledError,
    TransportError,
)
from .factory import TransportOptions, create_transport
from .promise import Deferred, Promise
from .streaming import StreamablePromise, streamify
from .transport import (
    BaseTransport,
    CanvasTransport,
    HttpProxyTransport,
    JsonpTransport,
    ProxyTransport,
    Transport,
)
from .types import RequestParams, ResponseResult
from .version import __version__

__all__ = [
    "__version__",
    "AuthenticationError",
    "BaseTransport",
    "CanvasTransport",
    "ConnectionError",
    "Deferred",
    "HttpError",
    "HttpProxyTransport",
    "JsonpTransport",
    "ParseError",
    "Promise",
    "ProxyTransport",
    "RequestCancelledError",
    "RequestParams",
    "ResponseResult",
    "StreamablePromise",
    "Transport",
    "TransportError",
    "TransportOptions",
    "create_transport",
    "default_base_url",
    "detect_base_url",
    "normalize_api_host",
    "parse_signed_request",
    "streamify",
]
