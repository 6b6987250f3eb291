from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from typing import Any, Final, Self

import msgspec

from dnslookup.errors import (
    RecordDecodeError,
    RecordsParseError,
    RemoteApiError,
    ResponseParseError,
    TimeParseError,
)
from dnslookup.records.decoder import DnsRecords
from dnslookup.records.models import convert_wire
from dnslookup.records.timefmt import format_api_time, parse_api_time

DATA_KEY: Final[str] = 'DNSData'
ERROR_KEY: Final[str] = 'ErrorMessage'
RECORDS_KEY: Final[str] = 'dnsRecords'


def _is_null(member: msgspec.Raw | None) -> bool:
    return member is None or bytes(member) in (b'', b'null')


def _as_time(value: str, key: str) -> dt.datetime | None:
    try:
        return parse_api_time(value)
    except TimeParseError as exc:
        raise RecordDecodeError(f'cannot decode field "{key}": {exc}') from exc


class _AuditWire(msgspec.Struct, frozen=True, rename='camel'):
    created_date: str = ''
    updated_date: str = ''


class Audit(msgspec.Struct, frozen=True):
    '''
    When the records were first collected and last updated by the API.
    '''
    created_date: dt.datetime | None = None
    updated_date: dt.datetime | None = None

    @classmethod
    def from_json(cls, obj: Any) -> Self:
        wire = convert_wire(obj, _AuditWire)
        return cls(
            created_date=_as_time(wire.created_date, 'createdDate'),
            updated_date=_as_time(wire.updated_date, 'updatedDate'),
        )

    def to_json(self) -> dict[str, str]:
        return {
            'createdDate': format_api_time(self.created_date),
            'updatedDate': format_api_time(self.updated_date),
        }


class _DnsDataWire(msgspec.Struct, frozen=True, rename='camel'):
    domain_name: str = ''
    types: tuple[int, ...] = ()
    dns_types: str = ''


class DnsLookupResponse(msgspec.Struct):
    '''
    The decoded `DNSData` block of a lookup.
    '''
    domain_name: str = ''
    types: tuple[int, ...] = ()
    dns_types: str = ''
    audit: Audit = msgspec.field(default_factory=Audit)
    dns_records: DnsRecords = msgspec.field(default_factory=DnsRecords)

    @classmethod
    def from_members(cls, members: Mapping[str, msgspec.Raw]) -> Self:
        '''
        Builds the response from the members of the `DNSData` object.
        `dnsRecords` stays undecoded until `DnsRecords` splits it.

        Raises
        ------
        RecordDecodeError
        RecordsParseError
        '''
        plain = {
            key: msgspec.json.decode(member)
            for key, member in members.items()
            if key != RECORDS_KEY
        }
        wire = convert_wire(plain, _DnsDataWire)

        records = members.get(RECORDS_KEY)
        return cls(
            domain_name=wire.domain_name,
            types=wire.types,
            dns_types=wire.dns_types,
            audit=Audit.from_json(plain.get('audit')),
            dns_records=(
                DnsRecords() if _is_null(records) else DnsRecords.from_json(bytes(records))
            ),
        )

    @classmethod
    def from_json(cls, data: bytes | bytearray | str) -> Self:
        try:
            members = msgspec.json.decode(data, type=dict[str, msgspec.Raw])
        except msgspec.DecodeError as exc:
            raise RecordDecodeError(str(exc)) from exc
        return cls.from_members(members)

    def to_json(self) -> str:
        return msgspec.json.encode(
            {
                'domainName': self.domain_name,
                'types': self.types,
                'dnsTypes': self.dns_types,
                'audit': self.audit.to_json(),
                RECORDS_KEY: msgspec.Raw(self.dns_records.to_json().encode('utf-8')),
            }
        ).decode('utf-8')


class ErrorMessage(msgspec.Struct, frozen=True):
    '''
    The `ErrorMessage` block the API sends when it cannot serve a lookup.
    '''
    code: str = msgspec.field(default='', name='errorCode')
    message: str = msgspec.field(default='', name='msg')

    @classmethod
    def from_json(cls, obj: Any) -> Self:
        return convert_wire(obj, cls)

    @property
    def is_error(self) -> bool:
        return bool(self.code or self.message)

    def to_exception(self, **kwargs: Any) -> RemoteApiError:
        return RemoteApiError(self.code, self.message, **kwargs)


class LookupEnvelope(msgspec.Struct):
    data: DnsLookupResponse = msgspec.field(default_factory=DnsLookupResponse)
    error: ErrorMessage = msgspec.field(default_factory=ErrorMessage)


def parse_lookup_envelope(body: bytes | bytearray | str) -> LookupEnvelope:
    '''
    Parses a JSON API response body, i.e.

    `{"DNSData": {...}, "ErrorMessage": {"errorCode": "...", "msg": "..."}}`

    Either block may be absent or null, the missing one keeps its zero
    value.

    Raises
    ------
    ResponseParseError
        _the body is not valid JSON or a field has the wrong type_
    '''
    try:
        members = msgspec.json.decode(body, type=dict[str, msgspec.Raw])
        envelope = LookupEnvelope()
        if not _is_null(data := members.get(DATA_KEY)):
            envelope.data = DnsLookupResponse.from_members(
                msgspec.json.decode(data, type=dict[str, msgspec.Raw])
            )
        if (error := members.get(ERROR_KEY)) is not None:
            envelope.error = ErrorMessage.from_json(msgspec.json.decode(error))
    except (msgspec.DecodeError, RecordDecodeError, RecordsParseError) as exc:
        raise ResponseParseError(exc) from exc
    return envelope
