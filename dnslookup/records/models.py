import typing
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, ClassVar, Final, Self, TypeAlias, TypeVar

import msgspec

from dnslookup.errors import RecordDecodeError

S = TypeVar('S', bound=msgspec.Struct)


def _zero_items(field_type: Any, items: list) -> list:
    # nulls inside `tuple[str, ...]` / `tuple[int, ...]` arrays become "" / 0
    args = typing.get_args(field_type)
    if not args or None not in items:
        return items
    zero = args[0]()
    return [zero if item is None else item for item in items]


def _wire_values(cls: type[msgspec.Struct], obj: Any) -> Any:
    '''
    Picks the keys `cls` knows about out of a decoded JSON object. A
    missing key or a JSON null keeps the field default.
    '''
    if obj is None:
        return {}
    if not isinstance(obj, Mapping):
        return obj

    values: dict[str, Any] = {}
    for field in msgspec.structs.fields(cls):
        if field.name == 'common':
            continue
        value = obj.get(field.encode_name)
        if value is None:
            continue
        if isinstance(value, list):
            value = _zero_items(field.type, value)
        values[field.encode_name] = value
    return values


def convert_wire(obj: Any, cls: type[S]) -> S:
    '''
    Builds the struct `cls` from a decoded JSON value with msgspec's strict
    conversion: ints reject floats, bools and strings, strings reject
    everything else, floats take any number. Unknown keys are ignored.

    Raises
    ------
    RecordDecodeError
        _a present value has the wrong JSON type_
    '''
    try:
        return msgspec.convert(_wire_values(cls, obj), type=cls)
    except msgspec.ValidationError as exc:
        raise RecordDecodeError(f'cannot decode {cls.__name__}: {exc}') from exc


class CommonFields(msgspec.Struct, frozen=True, rename='camel'):
    '''
    The envelope every DNS record carries regardless of its type.
    '''
    type: int = 0
    dns_type: str = ''
    name: str = ''
    ttl: int = 0
    rrset_type: int = msgspec.field(default=0, name='rRsetType')
    raw_text: str = ''

    @classmethod
    def from_json(cls, obj: Any) -> Self:
        return convert_wire(obj, cls)

    def to_json(self) -> dict[str, Any]:
        return msgspec.to_builtins(self)


class _Record(msgspec.Struct, frozen=True, rename='camel'):
    '''
    Shared behaviour of the concrete record types. Each subclass holds
    the envelope as its `common` field and declares its own tag. On the
    wire the envelope and the type specific fields share one object.
    '''
    DNS_TYPE: ClassVar[str]

    common: CommonFields = msgspec.field(default_factory=CommonFields)

    @classmethod
    def from_json(cls, obj: Any) -> Self:
        '''
        Builds the record from a decoded JSON object.

        Raises
        ------
        RecordDecodeError
        '''
        common = CommonFields.from_json(obj)
        return msgspec.structs.replace(convert_wire(obj, cls), common=common)

    def to_json(self) -> dict[str, Any]:
        payload = msgspec.to_builtins(self)
        del payload['common']
        return {**self.common.to_json(), **payload}

    @property
    def name(self) -> str:
        return self.common.name

    @property
    def ttl(self) -> int:
        return self.common.ttl


class ARecord(_Record):
    '''
    An IPv4 address record.
    '''
    DNS_TYPE: ClassVar[str] = 'A'
    address: str = ''


class AAAARecord(_Record):
    '''
    An IPv6 address record.
    '''
    DNS_TYPE: ClassVar[str] = 'AAAA'
    address: str = ''


class NSRecord(_Record):
    '''
    A name server record, `target` is the name server.
    '''
    DNS_TYPE: ClassVar[str] = 'NS'
    target: str = ''


class MXRecord(_Record):
    '''
    A mail exchange record.
    '''
    DNS_TYPE: ClassVar[str] = 'MX'
    target: str = ''
    priority: int = 0


class MDRecord(_Record):
    '''
    Obsolete mail destination record.
    '''
    DNS_TYPE: ClassVar[str] = 'MD'
    additional_name: str = ''
    mail_agent: str = ''


class MFRecord(_Record):
    '''
    Obsolete mail forwarder record.
    '''
    DNS_TYPE: ClassVar[str] = 'MF'
    additional_name: str = ''
    mail_agent: str = ''


class MBRecord(_Record):
    '''
    Mailbox domain name record.
    '''
    DNS_TYPE: ClassVar[str] = 'MB'
    additional_name: str = ''
    mailbox: str = ''


class SOARecord(_Record):
    '''
    A "Start of Authority" record. The timers are all in seconds.
    '''
    DNS_TYPE: ClassVar[str] = 'SOA'
    admin: str = ''
    host: str = ''
    expire: int = 0
    minimum: int = 0
    refresh: int = 0
    retry: int = 0
    serial: int = 0


class TXTRecord(_Record):
    DNS_TYPE: ClassVar[str] = 'TXT'
    strings: tuple[str, ...] = ()

    @property
    def text(self) -> str:
        return ''.join(self.strings)


class CAARecord(_Record):
    '''
    Certification authority authorization, `tag` names the property
    (issue, issuewild, iodef) and `value` holds it.
    '''
    DNS_TYPE: ClassVar[str] = 'CAA'
    flags: int = 0
    tag: str = ''
    value: str = ''


class CNAMERecord(_Record):
    DNS_TYPE: ClassVar[str] = 'CNAME'
    alias: str = ''
    target: str = ''


class DNAMERecord(_Record):
    DNS_TYPE: ClassVar[str] = 'DNAME'
    alias: str = ''
    target: str = ''


class DNSKEYRecord(_Record):
    '''
    A DNSSEC public key. `key` is the key material split the way
    the API returns it.
    '''
    DNS_TYPE: ClassVar[str] = 'DNSKEY'
    algorithm: int = 0
    flags: int = 0
    footprint: int = 0
    key: tuple[str, ...] = ()
    protocol: int = 0
    public_key: str = ''


class NSEC3PARAMRecord(_Record):
    DNS_TYPE: ClassVar[str] = 'NSEC3PARAM'
    flags: int = 0
    hash_algorithm: int = 0
    iterations: int = 0
    salt: tuple[str, ...] = ()


class NSECRecord(_Record):
    '''
    `next` is the next owner name, `types` the type bit map as codes.
    '''
    DNS_TYPE: ClassVar[str] = 'NSEC'
    next: str = ''
    types: tuple[int, ...] = ()


class DSRecord(_Record):
    '''
    Delegation signer record.
    '''
    DNS_TYPE: ClassVar[str] = 'DS'
    algorithm: int = 0
    digest: tuple[str, ...] = ()
    digest_id: int = msgspec.field(default=0, name='digestID')
    footprint: int = 0


class PTRRecord(_Record):
    DNS_TYPE: ClassVar[str] = 'PTR'
    target: str = ''


class SRVRecord(_Record):
    '''
    Service locator record.
    '''
    DNS_TYPE: ClassVar[str] = 'SRV'
    port: int = 0
    priority: int = 0
    target: str = ''
    weight: int = 0


class LOCRecord(_Record):
    '''
    Geographic location record, precisions are in centimeters.
    '''
    DNS_TYPE: ClassVar[str] = 'LOC'
    altitude: float = 0.0
    h_precision: float = 0.0
    latitude: float = 0.0
    longitude: float = 0.0
    size: float = 0.0
    v_precision: float = 0.0

    @property
    def maps_link(self) -> str:
        return f"https://maps.google.com/?q={self.latitude},{self.longitude}"


class NAPTRRecord(_Record):
    '''
    Naming authority pointer record.
    '''
    DNS_TYPE: ClassVar[str] = 'NAPTR'
    flags: str = ''
    order: int = 0
    preference: int = 0
    regexp: str = ''
    replacement: str = ''
    service: str = ''


class HINFORecord(_Record):
    DNS_TYPE: ClassVar[str] = 'HINFO'
    cpu: str = ''
    os: str = ''


class RPRecord(_Record):
    '''
    Responsible person record.
    '''
    DNS_TYPE: ClassVar[str] = 'RP'
    mailbox: str = ''
    text_domain: str = ''


class DLVRecord(_Record):
    '''
    DNSSEC lookaside validation record, same shape as DS.
    '''
    DNS_TYPE: ClassVar[str] = 'DLV'
    algorithm: int = 0
    digest: tuple[str, ...] = ()
    digest_id: int = msgspec.field(default=0, name='digestID')
    footprint: int = 0


class SSHFPRecord(_Record):
    DNS_TYPE: ClassVar[str] = 'SSHFP'
    algorithm: int = 0
    digest_type: int = 0
    fingerprint: tuple[str, ...] = msgspec.field(default=(), name='fingerPrint')


class DHCIDRecord(_Record):
    DNS_TYPE: ClassVar[str] = 'DHCID'
    data: tuple[str, ...] = ()


class TLSARecord(_Record):
    '''
    TLS certificate association record.
    '''
    DNS_TYPE: ClassVar[str] = 'TLSA'
    certificate_association_data: tuple[str, ...] = ()
    certificate_usage: int = 0
    matching_type: int = 0
    selector: int = 0


class NSAPRecord(_Record):
    DNS_TYPE: ClassVar[str] = 'NSAP'
    address: str = ''


class NULLRecord(_Record):
    DNS_TYPE: ClassVar[str] = 'NULL'
    data: tuple[str, ...] = ()


DnsRecordValue: TypeAlias = (
    ARecord
    | AAAARecord
    | NSRecord
    | MXRecord
    | MDRecord
    | MFRecord
    | MBRecord
    | SOARecord
    | TXTRecord
    | CAARecord
    | CNAMERecord
    | DNAMERecord
    | DNSKEYRecord
    | NSEC3PARAMRecord
    | NSECRecord
    | DSRecord
    | PTRRecord
    | SRVRecord
    | LOCRecord
    | NAPTRRecord
    | HINFORecord
    | RPRecord
    | DLVRecord
    | SSHFPRecord
    | DHCIDRecord
    | TLSARecord
    | NSAPRecord
    | NULLRecord
)

RECORD_TYPES: Final[Mapping[str, type[DnsRecordValue]]] = MappingProxyType(
    {
        cls.DNS_TYPE: cls
        for cls in (
            ARecord,
            AAAARecord,
            NSRecord,
            MXRecord,
            MDRecord,
            MFRecord,
            MBRecord,
            SOARecord,
            TXTRecord,
            CAARecord,
            CNAMERecord,
            DNAMERecord,
            DNSKEYRecord,
            NSEC3PARAMRecord,
            NSECRecord,
            DSRecord,
            PTRRecord,
            SRVRecord,
            LOCRecord,
            NAPTRRecord,
            HINFORecord,
            RPRecord,
            DLVRecord,
            SSHFPRecord,
            DHCIDRecord,
            TLSARecord,
            NSAPRecord,
            NULLRecord,
        )
    }
)
