'''
Query parameter builders for the lookup endpoint.

An `Option` takes the current query parameters and returns the updated
set. Options are applied in the order they are passed, so a later option
overrides an earlier one touching the same parameter.
'''
from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Final, TypeAlias

import httpx

Option: TypeAlias = Callable[[httpx.QueryParams], httpx.QueryParams]

DEFAULT_RECORD_TYPE: Final[str] = '_all'
JSON_FORMAT: Final[str] = 'JSON'


def output_format(value: str) -> Option:
    '''
    Sets the response format, `JSON` or `XML`. The typed lookup always
    overrides this with `JSON`.
    '''
    fmt = value.upper()

    def apply(params: httpx.QueryParams) -> httpx.QueryParams:
        return params.set('outputFormat', fmt)

    return apply


def record_type(value: str) -> Option:
    '''
    Restricts the record types returned, i.e. `A`, `NS,MX` or `_all`.
    '''
    types = value.upper()

    def apply(params: httpx.QueryParams) -> httpx.QueryParams:
        return params.set('type', types)

    return apply


def callback(name: str) -> Option:
    '''
    Sets the JSONP callback the API wraps a JSON response with.
    '''
    def apply(params: httpx.QueryParams) -> httpx.QueryParams:
        return params.set('callback', name)

    return apply


def apply_options(params: httpx.QueryParams, options: Iterable[Option]) -> httpx.QueryParams:
    for option in options:
        params = option(params)
    return params
