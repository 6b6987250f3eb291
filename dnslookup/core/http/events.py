from __future__ import annotations

import abc
import dataclasses as dc
from collections.abc import Callable
from typing import Final, Protocol, Self

import httpx
from loguru import logger

REDACTED: Final[str] = 'REDACTED'
SECRET_PARAMS: Final[frozenset[str]] = frozenset({'apiKey'})


class RequestHook(Protocol):
    async def __call__(self, request: httpx.Request) -> None: ...

class ResponseHook(Protocol):
    async def __call__(self, response: httpx.Response) -> None: ...


def redact_url(url: httpx.URL | str) -> str:
    '''
    Masks the API key (and any other secret query parameter) of a URL
    so it can be logged or attached to errors.
    '''
    url = httpx.URL(str(url))
    params = url.params
    for name in SECRET_PARAMS & set(params.keys()):
        params = params.set(name, REDACTED)
    return str(url.copy_with(params=params))


class HttpxMiddleware(abc.ABC):
    @abc.abstractmethod
    async def on_request(self, request: httpx.Request) -> None:
        pass

    @abc.abstractmethod
    async def on_response(
        self,
        response: httpx.Response,
    ) -> None:
        pass


class RequestLogger(HttpxMiddleware):
    '''
    Logs every lookup request and the status it came back with,
    never the API key.
    '''

    async def on_request(self, request: httpx.Request) -> None:
        logger.debug('--> {} {}', request.method, redact_url(request.url))

    async def on_response(self, response: httpx.Response) -> None:
        logger.debug(
            '<-- {} {} ({})',
            response.status_code,
            redact_url(response.request.url),
            response.http_version,
        )


@dc.dataclass
class ClientEvents:
    '''
    Manages HTTPX client event hooks for requests and responses. Hooks are
    added through `register`, one by one or as an `HttpxMiddleware`, and
    `merge` appends the hooks of another registry.
    '''
    _request_hooks: list[RequestHook] = dc.field(default_factory=list, init=False)
    _response_hooks: list[ResponseHook] = dc.field(default_factory=list, init=False)

    def register(
        self,
        *,
        response: ResponseHook | None = None,
        request: RequestHook | None = None,
        middleware: HttpxMiddleware | None = None,
    ) -> None:
        if middleware:
            self._request_hooks.append(middleware.on_request)
            self._response_hooks.append(middleware.on_response)

        if response:
            self._response_hooks.append(response)

        if request:
            self._request_hooks.append(request)

    @property
    def request_hooks(self) -> tuple[RequestHook, ...]:
        return tuple(self._request_hooks)

    @property
    def response_hooks(self) -> tuple[ResponseHook, ...]:
        return tuple(self._response_hooks)

    def httpx_args(self) -> dict[str, list[Callable]]:
        '''
        Returns the hooks in the shape `httpx.AsyncClient(event_hooks=...)`
        expects.

        Returns
        -------
        dict[str, list[Callable]]
        '''
        return {
            'request': list(self._request_hooks),
            'response': list(self._response_hooks),
        }

    def merge(self, other: Self) -> None:
        self._request_hooks.extend(other._request_hooks)
        self._response_hooks.extend(other._response_hooks)

    @classmethod
    def with_logging(cls) -> Self:
        events = cls()
        events.register(middleware=RequestLogger())
        return events
