'''
Codec for the timestamps used in the `audit` block, which the API
writes as `2022-07-12 11:46:25 UTC`. An empty string means "no date".
'''
from __future__ import annotations

import datetime as dt
import re
from typing import Final

from dnslookup.errors import TimeParseError

TIME_LAYOUT: Final[str] = '%Y-%m-%d %H:%M:%S'
_DISPLAY_LAYOUT: Final[str] = 'YYYY-MM-DD HH:MM:SS ZZZ'

_TIME_RE = re.compile(
    r'(?P<stamp>\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}) (?P<zone>[A-Z][A-Za-z]{2,4})'
)


def _zone(abbreviation: str) -> dt.tzinfo:
    # unknown abbreviations get a zero offset but keep their name
    if abbreviation == 'UTC':
        return dt.timezone.utc
    return dt.timezone(dt.timedelta(0), abbreviation)


def parse_api_time(text: str) -> dt.datetime | None:
    '''
    Parses an API timestamp.

    Parameters
    ----------
    text : str
        _e.g. `2006-01-02 15:04:05 UTC`, or `""` for no timestamp_

    Returns
    -------
    datetime | None

    Raises
    ------
    TimeParseError
        _the literal does not match the layout_
    '''
    if not isinstance(text, str):
        raise TimeParseError(f'expected a string timestamp, got {type(text).__name__}')
    if text == '':
        return None

    match = _TIME_RE.fullmatch(text)
    if not match:
        raise TimeParseError(
            f'parsing time "{text}" as "{_DISPLAY_LAYOUT}": '
            'layout mismatch'
        )
    try:
        stamp = dt.datetime.strptime(match['stamp'], TIME_LAYOUT)
    except ValueError as exc:
        raise TimeParseError(
            f'parsing time "{text}" as "{_DISPLAY_LAYOUT}": {exc}'
        ) from exc

    return stamp.replace(tzinfo=_zone(match['zone']))


def format_api_time(value: dt.datetime | None) -> str:
    '''
    Formats a timestamp the way the API writes it, `None` becomes `""`.
    '''
    if value is None:
        return ''
    zone = value.tzname() or 'UTC'
    return f'{value.strftime(TIME_LAYOUT)} {zone}'
