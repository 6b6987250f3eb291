from __future__ import annotations

import dataclasses as dc
import os
from collections.abc import Sequence
from typing import Any, Final, Self

import httpx
import msgspec
from loguru import logger

from dnslookup.api.options import (
    DEFAULT_RECORD_TYPE,
    JSON_FORMAT,
    Option,
    apply_options,
    output_format,
)
from dnslookup.core.http.client import ClientOptions, create_httpx_client
from dnslookup.core.http.events import ClientEvents, redact_url
from dnslookup.errors import (
    ArgumentError,
    BadStatusError,
    DnsLookupError,
    RequestExecutionError,
    RequestTimeoutError,
    ResponseCloseError,
    ResponseParseError,
    ResponseReadError,
)
from dnslookup.records.response import DnsLookupResponse, parse_lookup_envelope

DEFAULT_BASE_URL: Final[str] = 'https://www.whoisxmlapi.com/whoisserver/DNSService'
API_KEY_ENV: Final[str] = 'DNS_LOOKUP_API_KEY'
BASE_URL_ENV: Final[str] = 'DNS_LOOKUP_BASE_URL'


@dc.dataclass(slots=True, frozen=True)
class ApiResponse:
    '''
    An HTTP response from the API with its body fully read.
    `url` has the API key redacted.
    '''
    status_code: int
    headers: httpx.Headers
    body: bytes
    url: str
    http_response: httpx.Response | None = dc.field(
        default=None, repr=False, compare=False
    )

    @classmethod
    def from_httpx(cls, response: httpx.Response, body: bytes) -> Self:
        return cls(
            status_code=response.status_code,
            headers=response.headers,
            body=body,
            url=redact_url(response.request.url),
            http_response=response,
        )

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code <= 299

    @property
    def text(self) -> str:
        return self.body.decode('utf-8', errors='replace')

    def json(self) -> Any:
        return msgspec.json.decode(self.body)


def _declared_length(response: httpx.Response) -> int | None:
    value = response.headers.get('Content-Length')
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class DnsLookupClient:
    '''
    Client for the DNS Lookup API.

    The instance only holds its configuration and the underlying
    `httpx.AsyncClient`, so it can be shared between concurrent tasks.
    Calls are cancelled the asyncio way, by cancelling the awaiting task
    or wrapping the call in `asyncio.timeout`. Nothing is retried, see
    `dnslookup.core.retries` for an opt-in wrapper.
    '''

    def __init__(
        self,
        api_key: str,
        *,
        base_url: str | httpx.URL = DEFAULT_BASE_URL,
        client: httpx.AsyncClient | None = None,
        options: ClientOptions | None = None,
        events: ClientEvents | None = None,
    ) -> None:
        self._api_key: Final[str] = api_key
        self.base_url: Final[httpx.URL] = httpx.URL(str(base_url))
        self._owns_client = client is None
        if client is None:
            hooks = ClientEvents.with_logging()
            if events is not None:
                hooks.merge(events)
            client = create_httpx_client(options=options, events=hooks)
        self.client: httpx.AsyncClient = client

    @classmethod
    def from_env(
        cls,
        *,
        client: httpx.AsyncClient | None = None,
        options: ClientOptions | None = None,
    ) -> Self:
        '''
        Builds a client from `DNS_LOOKUP_API_KEY` and, when set,
        `DNS_LOOKUP_BASE_URL`.

        Raises
        ------
        ArgumentError
            _no API key in the environment_
        '''
        api_key = os.environ.get(API_KEY_ENV, '')
        if not api_key:
            raise ArgumentError('apiKey', f'is required, set {API_KEY_ENV}')
        return cls(
            api_key,
            base_url=os.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL,
            client=client,
            options=options,
        )

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client and not self.client.is_closed:
            await self.client.aclose()

    def build_request(
        self,
        domain_name: str,
        options: Sequence[Option] = (),
        *,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> httpx.Request:
        '''
        Builds the GET request for a lookup. The API key, `domainName`
        and `type=_all` are always set, then `options` are applied in
        order. Values are sent as given, the API validates them.
        '''
        params = httpx.QueryParams(
            {
                'apiKey': self._api_key,
                'domainName': domain_name,
                'type': DEFAULT_RECORD_TYPE,
            }
        )
        params = apply_options(params, options)
        return self.client.build_request(
            'GET',
            self.base_url,
            params=params,
            timeout=timeout,
        )

    async def _read(self, response: httpx.Response) -> ApiResponse:
        '''
        Reads the whole body then closes the response. A read failure
        (including a body shorter than its Content-Length) wins over a
        close failure.
        '''
        chunks: list[bytes] = []
        read_error: DnsLookupError | None = None
        close_error: DnsLookupError | None = None
        try:
            async for chunk in response.aiter_bytes():
                chunks.append(chunk)
        except (httpx.RequestError, httpx.StreamError) as exc:
            # httpx closes the response itself once the body is exhausted
            if response.is_closed:
                close_error = ResponseCloseError(exc)
                close_error.__cause__ = exc
            else:
                read_error = ResponseReadError(exc)
                read_error.__cause__ = exc
        finally:
            try:
                await response.aclose()
            except httpx.HTTPError as exc:
                if close_error is None:
                    close_error = ResponseCloseError(exc)
                    close_error.__cause__ = exc

        if read_error is None:
            declared = _declared_length(response)
            if declared is not None and response.num_bytes_downloaded < declared:
                read_error = ResponseReadError('unexpected EOF')

        api_response = ApiResponse.from_httpx(response, b''.join(chunks))
        failure = read_error or close_error
        if failure is not None:
            failure.response = api_response  # type: ignore[attr-defined]
            raise failure
        return api_response

    async def _execute(
        self,
        domain_name: str,
        options: Sequence[Option],
        timeout: Any,
    ) -> ApiResponse:
        request = self.build_request(domain_name, options, timeout=timeout)
        logger.debug('Looking up DNS records for {}', domain_name)
        try:
            response = await self.client.send(request, stream=True)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(exc) from exc
        except httpx.RequestError as exc:
            raise RequestExecutionError(exc) from exc

        api_response = await self._read(response)
        logger.debug(
            'Lookup for {} returned {} ({} bytes)',
            domain_name,
            api_response.status_code,
            len(api_response.body),
        )
        return api_response

    async def get(
        self,
        domain_name: str,
        *options: Option,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> tuple[DnsLookupResponse, ApiResponse]:
        '''
        Looks up the DNS records of a domain and decodes them.

        The output format is always forced to JSON, a caller supplied
        `output_format` is overridden since only JSON can be decoded.
        The HTTP status is not checked here, the body decides.

        Parameters
        ----------
        domain_name : str
        *options : Option
            _query options applied in order_
        timeout : float | httpx.Timeout | None, optional
            _per call timeout, defaults to the client's_

        Returns
        -------
        tuple[DnsLookupResponse, ApiResponse]

        Raises
        ------
        RequestExecutionError
            _the request could not be sent_
        ResponseReadError
            _the body could not be read in full_
        ResponseParseError
            _the body is not a valid lookup response_
        RemoteApiError
            _the API reported an error_
        '''
        requested = apply_options(httpx.QueryParams(), options).get('outputFormat')
        if requested is not None and requested != JSON_FORMAT:
            logger.warning(
                'outputFormat={} is ignored, typed lookups always request {}',
                requested,
                JSON_FORMAT,
            )

        response = await self._execute(
            domain_name,
            (*options, output_format(JSON_FORMAT)),
            timeout,
        )
        try:
            envelope = parse_lookup_envelope(response.body)
        except ResponseParseError as exc:
            exc.response = response
            raise

        if envelope.error.is_error:
            logger.warning(
                'API error for {}: [{}] {}',
                domain_name,
                envelope.error.code,
                envelope.error.message,
            )
            raise envelope.error.to_exception(response=response)

        return envelope.data, response

    async def get_raw(
        self,
        domain_name: str,
        *options: Option,
        timeout: Any = httpx.USE_CLIENT_DEFAULT,
    ) -> ApiResponse:
        '''
        Sends the lookup exactly as configured and returns the response
        undecoded.

        Raises
        ------
        RequestExecutionError
        ResponseReadError
        BadStatusError
            _the status code is outside 200-299_
        '''
        response = await self._execute(domain_name, options, timeout)
        if not response.is_success:
            logger.warning(
                'Lookup for {} failed with status {}',
                domain_name,
                response.status_code,
            )
            raise BadStatusError(response)
        return response
