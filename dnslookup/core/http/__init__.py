from .client import ClientOptions, create_httpx_client, default_headers
from .events import ClientEvents, HttpxMiddleware, RequestLogger, redact_url

__all__ = [
    "ClientOptions",
    "create_httpx_client",
    "default_headers",
    "ClientEvents",
    "HttpxMiddleware",
    "RequestLogger",
    "redact_url",
]
