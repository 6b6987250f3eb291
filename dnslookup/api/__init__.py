from .client import DEFAULT_BASE_URL, ApiResponse, DnsLookupClient
from .options import Option, callback, output_format, record_type

__all__ = [
    "DEFAULT_BASE_URL",
    "ApiResponse",
    "DnsLookupClient",
    "Option",
    "callback",
    "output_format",
    "record_type",
]
