'''
Async client for the DNS Lookup API.

    async with DnsLookupClient(api_key) as client:
        response, _ = await client.get("example.com", record_type("A,MX"))
        for record in response.dns_records.A:
            print(record.address)
'''
from loguru import logger

from .__about__ import __version__
from .api import (
    DEFAULT_BASE_URL,
    ApiResponse,
    DnsLookupClient,
    Option,
    callback,
    output_format,
    record_type,
)
from .core import AsyncRetries, NoAttemptsLeftError, lookup_retries
from .core.http import ClientOptions
from .errors import (
    ArgumentError,
    BadStatusError,
    DnsLookupError,
    RecordDecodeError,
    RecordsParseError,
    RemoteApiError,
    RequestExecutionError,
    RequestTimeoutError,
    ResponseCloseError,
    ResponseParseError,
    ResponseReadError,
    TimeParseError,
    UnsupportedDnsTypeError,
)
from .records import (
    RECORD_TYPES,
    Audit,
    CommonFields,
    DnsLookupResponse,
    DnsRecord,
    DnsRecords,
    ErrorMessage,
)

# silent as a library, the CLI turns logging back on
logger.disable(__name__)

__all__ = [
    "__version__",
    "DEFAULT_BASE_URL",
    "ApiResponse",
    "DnsLookupClient",
    "ClientOptions",
    "Option",
    "callback",
    "output_format",
    "record_type",
    "AsyncRetries",
    "NoAttemptsLeftError",
    "lookup_retries",
    "ArgumentError",
    "BadStatusError",
    "DnsLookupError",
    "RecordDecodeError",
    "RecordsParseError",
    "RemoteApiError",
    "RequestExecutionError",
    "RequestTimeoutError",
    "ResponseCloseError",
    "ResponseParseError",
    "ResponseReadError",
    "TimeParseError",
    "UnsupportedDnsTypeError",
    "RECORD_TYPES",
    "Audit",
    "CommonFields",
    "DnsLookupResponse",
    "DnsRecord",
    "DnsRecords",
    "ErrorMessage",
]
