import dataclasses as dc
from typing import Final

import httpx

from dnslookup.__about__ import __version__
from dnslookup.core.http.events import ClientEvents

MEDIA_TYPE: Final[str] = 'application/json'
USER_AGENT: Final[str] = f'dnslookup-python/{__version__}'


def default_headers() -> dict[str, str]:
    return {
        'Content-Type': MEDIA_TYPE,
        'Accept': MEDIA_TYPE,
        'User-Agent': USER_AGENT,
    }


@dc.dataclass(slots=True)
class ClientOptions:
    """
    Options for configuring the HTTPX AsyncClient used to reach the
    lookup API.
    """

    timeout: float = 10
    max_connections: int = 10
    max_keepalive: int = 5
    keep_alive_expiry: int = 15
    connect_timeout: float = 5
    read_timeout: float = 10
    http2: bool = True
    verify: bool = True
    follow_redirects: bool = True
    proxy: str | None = None
    headers: dict[str, str] = dc.field(default_factory=dict)

    @property
    def httpx_timeout(self) -> httpx.Timeout:
        return httpx.Timeout(
            self.timeout,
            connect=self.connect_timeout,
            read=self.read_timeout,
        )

    @property
    def httpx_limits(self) -> httpx.Limits:
        return httpx.Limits(
            max_connections=self.max_connections,
            max_keepalive_connections=self.max_keepalive,
            keepalive_expiry=self.keep_alive_expiry,
        )


def create_httpx_client(
    *,
    options: ClientOptions | None = None,
    events: ClientEvents | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    '''
    Builds the AsyncClient for the lookup API, caller supplied headers in
    `options.headers` win over the defaults.

    Parameters
    ----------
    options : ClientOptions | None, optional
        by default None
    events : ClientEvents | None, optional
        _request/response hooks to install_, by default None
    transport : httpx.AsyncBaseTransport | None, optional
        _replaces the network transport, mostly for tests_, by default None

    Returns
    -------
    httpx.AsyncClient
    '''
    options = options or ClientOptions()
    headers = {**default_headers(), **options.headers}

    kwargs = {
        'timeout': options.httpx_timeout,
        'headers': headers,
        'limits': options.httpx_limits,
        'http2': options.http2,
        'follow_redirects': options.follow_redirects,
        'verify': options.verify,
    }
    if options.proxy:
        kwargs['proxy'] = options.proxy
    if transport is not None:
        kwargs['transport'] = transport
    if events:
        kwargs['event_hooks'] = events.httpx_args()

    return httpx.AsyncClient(**kwargs)
