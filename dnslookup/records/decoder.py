from __future__ import annotations

import dataclasses as dc
from collections.abc import Iterator
from typing import Self

import msgspec
from loguru import logger

from dnslookup.errors import (
    RecordDecodeError,
    RecordsParseError,
    UnsupportedDnsTypeError,
)
from dnslookup.records.models import (
    RECORD_TYPES,
    AAAARecord,
    ARecord,
    CAARecord,
    CNAMERecord,
    CommonFields,
    DHCIDRecord,
    DLVRecord,
    DNAMERecord,
    DNSKEYRecord,
    DnsRecordValue,
    DSRecord,
    HINFORecord,
    LOCRecord,
    MBRecord,
    MDRecord,
    MFRecord,
    MXRecord,
    NAPTRRecord,
    NSAPRecord,
    NSEC3PARAMRecord,
    NSECRecord,
    NSRecord,
    NULLRecord,
    PTRRecord,
    RPRecord,
    SOARecord,
    SRVRecord,
    SSHFPRecord,
    TLSARecord,
    TXTRecord,
)


class _DumpEntry(msgspec.Struct):
    '''
    The canonical encoding of one `DnsRecord`.
    '''
    common: CommonFields = msgspec.field(name='CommonFields')
    raw: msgspec.Raw
    parse_error: str | None = msgspec.field(default=None, name='parseError')


class _DumpRaw(msgspec.Struct):
    raw: msgspec.Raw


@dc.dataclass(slots=True, frozen=True)
class DnsRecord:
    '''
    One entry of the flat record list: the envelope, the JSON the
    record was sent as and the error hit while decoding it, if any.
    '''
    common: CommonFields
    raw: bytes
    parse_error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.parse_error is None

    @property
    def raw_text(self) -> str:
        return self.raw.decode('utf-8')

    def to_dump(self) -> _DumpEntry:
        return _DumpEntry(
            common=self.common,
            raw=msgspec.Raw(self.raw),
            parse_error=None if self.parse_error is None else str(self.parse_error),
        )

    def to_json_text(self) -> str:
        return msgspec.json.encode(self.to_dump()).decode('utf-8')


def _decode_fragment(fragment: msgspec.Raw) -> tuple[DnsRecord, DnsRecordValue | None]:
    '''
    Decodes a single element of the records array. Failures are kept on
    the returned entry, never raised.
    '''
    raw = bytes(fragment)
    # the fragment was cut out of a valid document, it always decodes
    obj = msgspec.json.decode(raw)
    try:
        common = CommonFields.from_json(obj)
    except RecordDecodeError as exc:
        return DnsRecord(CommonFields(), raw, exc), None

    record_cls = RECORD_TYPES.get(common.dns_type)
    if record_cls is None:
        return DnsRecord(common, raw, UnsupportedDnsTypeError(common.dns_type)), None

    try:
        value = record_cls.from_json(obj)
    except RecordDecodeError as exc:
        return DnsRecord(common, raw, exc), None

    return DnsRecord(common, raw), value


@dc.dataclass(slots=True)
class DnsRecords:
    '''
    The records returned for a lookup.

    `all` holds one entry per element of the response array, in order,
    including the ones that failed to decode. The per-type lists only
    hold records whose type is known and which decoded cleanly; they are
    a convenience view and are not part of the serialized form.
    '''
    all: list[DnsRecord] = dc.field(default_factory=list)
    A: list[ARecord] = dc.field(default_factory=list)
    AAAA: list[AAAARecord] = dc.field(default_factory=list)
    NS: list[NSRecord] = dc.field(default_factory=list)
    MX: list[MXRecord] = dc.field(default_factory=list)
    MD: list[MDRecord] = dc.field(default_factory=list)
    MF: list[MFRecord] = dc.field(default_factory=list)
    MB: list[MBRecord] = dc.field(default_factory=list)
    SOA: list[SOARecord] = dc.field(default_factory=list)
    TXT: list[TXTRecord] = dc.field(default_factory=list)
    CAA: list[CAARecord] = dc.field(default_factory=list)
    CNAME: list[CNAMERecord] = dc.field(default_factory=list)
    DNAME: list[DNAMERecord] = dc.field(default_factory=list)
    DNSKEY: list[DNSKEYRecord] = dc.field(default_factory=list)
    NSEC3PARAM: list[NSEC3PARAMRecord] = dc.field(default_factory=list)
    NSEC: list[NSECRecord] = dc.field(default_factory=list)
    DS: list[DSRecord] = dc.field(default_factory=list)
    PTR: list[PTRRecord] = dc.field(default_factory=list)
    SRV: list[SRVRecord] = dc.field(default_factory=list)
    LOC: list[LOCRecord] = dc.field(default_factory=list)
    NAPTR: list[NAPTRRecord] = dc.field(default_factory=list)
    HINFO: list[HINFORecord] = dc.field(default_factory=list)
    RP: list[RPRecord] = dc.field(default_factory=list)
    DLV: list[DLVRecord] = dc.field(default_factory=list)
    SSHFP: list[SSHFPRecord] = dc.field(default_factory=list)
    DHCID: list[DHCIDRecord] = dc.field(default_factory=list)
    TLSA: list[TLSARecord] = dc.field(default_factory=list)
    NSAP: list[NSAPRecord] = dc.field(default_factory=list)
    NULL: list[NULLRecord] = dc.field(default_factory=list)

    def __len__(self) -> int:
        return len(self.all)

    def __iter__(self) -> Iterator[DnsRecord]:
        return iter(self.all)

    def records_of(self, dns_type: str) -> list[DnsRecordValue]:
        '''
        Returns the decoded records of one type.

        Raises
        ------
        UnsupportedDnsTypeError
            _the type is not one of the known record types_
        '''
        key = dns_type.upper()
        if key not in RECORD_TYPES:
            raise UnsupportedDnsTypeError(dns_type)
        return getattr(self, key)

    @property
    def errors(self) -> list[DnsRecord]:
        return [record for record in self.all if record.parse_error is not None]

    def counts(self) -> dict[str, int]:
        '''
        Number of decoded records per type, empty types left out.
        '''
        return {
            dns_type: len(getattr(self, dns_type))
            for dns_type in RECORD_TYPES
            if getattr(self, dns_type)
        }

    def _collect(self, fragment: msgspec.Raw) -> None:
        entry, value = _decode_fragment(fragment)
        self.all.append(entry)
        if value is None:
            logger.debug(
                'Skipping {} record {!r}: {}',
                entry.common.dns_type or '<unknown>',
                entry.common.name,
                entry.parse_error,
            )
            return
        getattr(self, value.DNS_TYPE).append(value)

    @classmethod
    def from_fragments(cls, fragments: list[msgspec.Raw]) -> Self:
        records = cls()
        for fragment in fragments:
            records._collect(fragment)
        return records

    @classmethod
    def from_json(cls, data: bytes | bytearray | str) -> Self:
        '''
        Decodes the `dnsRecords` array of an API response.

        Parameters
        ----------
        data : bytes | str
            _the raw JSON array_

        Returns
        -------
        DnsRecords

        Raises
        ------
        RecordsParseError
            _the payload is not a JSON array, this is the only failure
            that aborts the whole decode_
        '''
        try:
            fragments = msgspec.json.decode(data, type=list[msgspec.Raw])
        except msgspec.DecodeError as exc:
            raise RecordsParseError(f'cannot decode DNS records: {exc}') from exc
        return cls.from_fragments(fragments)

    def to_json(self) -> str:
        '''
        Encodes the flat record list. The typed lists are derived from it
        and are left out. An empty collection encodes as `[]`.
        '''
        return msgspec.json.encode(
            [record.to_dump() for record in self.all]
        ).decode('utf-8')

    @classmethod
    def from_dump(cls, data: bytes | bytearray | str) -> Self:
        '''
        Reads back the output of `to_json`. Every entry is decoded again
        from its `raw` member, so envelopes and raw bytes come back as they
        were.

        Raises
        ------
        RecordsParseError
        '''
        try:
            entries = msgspec.json.decode(data, type=list[_DumpRaw])
        except msgspec.DecodeError as exc:
            raise RecordsParseError(f'cannot decode dumped DNS records: {exc}') from exc
        return cls.from_fragments([entry.raw for entry in entries])


def decode_records(data: bytes | bytearray | str) -> DnsRecords:
    return DnsRecords.from_json(data)
