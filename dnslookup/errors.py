from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from dnslookup.api.client import ApiResponse


class DnsLookupError(Exception):
    '''
    Base class for every error raised by the dnslookup package.
    '''


class ArgumentError(DnsLookupError, ValueError):
    '''
    An invalid argument was passed to the client.
    '''

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        self.message = message
        super().__init__(f'invalid argument: "{name}" {message}')


class _WrappedError(DnsLookupError):
    '''
    An error that prefixes the failure with a short context tag,
    i.e. `cannot read response: unexpected EOF`.
    '''
    context: str = ''

    def __init__(
        self,
        cause: BaseException | str,
        *,
        response: ApiResponse | None = None,
    ) -> None:
        self.cause = cause
        self.response = response
        super().__init__(f'{self.context}: {cause}')


class RequestExecutionError(_WrappedError):
    context = 'cannot execute request'


class RequestTimeoutError(RequestExecutionError): ...


class ResponseReadError(_WrappedError):
    context = 'cannot read response'


class ResponseCloseError(_WrappedError):
    context = 'cannot close response'


class ResponseParseError(_WrappedError):
    context = 'cannot parse response'


class RecordsParseError(DnsLookupError, ValueError):
    '''
    The DNS records payload is not a JSON array.
    '''


class RecordDecodeError(DnsLookupError, ValueError):
    '''
    A single record (or one of its fields) has the wrong shape.
    '''


class UnsupportedDnsTypeError(RecordDecodeError):
    '''
    The record carries a `dnsType` tag this library has no model for.
    '''

    def __init__(self, dns_type: str = '') -> None:
        self.dns_type = dns_type
        super().__init__('unknown DNS type')


class TimeParseError(DnsLookupError, ValueError): ...


class RemoteApiError(DnsLookupError):
    '''
    The API answered with a well formed `ErrorMessage` envelope.
    '''

    def __init__(
        self,
        code: str,
        message: str,
        *,
        response: ApiResponse | None = None,
    ) -> None:
        self.code = code
        self.message = message
        self.response = response
        super().__init__(f'API error: [{code}] {message}')


class BadStatusError(DnsLookupError):
    '''
    Raised by the raw access path when the status code is not 2xx.
    The response (and its body, when any was sent) stays attached.
    '''

    def __init__(self, response: ApiResponse, message: str = '') -> None:
        self.response = response
        self.status_code = response.status_code
        self.message = message
        text = f'API failed with status code: {self.status_code}'
        if message:
            text += f' ({message})'
        super().__init__(text)

    @property
    def body(self) -> bytes:
        return self.response.body
