from .decoder import DnsRecord, DnsRecords, decode_records
from .models import (
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
from .response import Audit, DnsLookupResponse, ErrorMessage, parse_lookup_envelope
from .timefmt import format_api_time, parse_api_time

__all__ = [
    "DnsRecord",
    "DnsRecords",
    "decode_records",
    "RECORD_TYPES",
    "CommonFields",
    "DnsRecordValue",
    "ARecord",
    "AAAARecord",
    "NSRecord",
    "MXRecord",
    "MDRecord",
    "MFRecord",
    "MBRecord",
    "SOARecord",
    "TXTRecord",
    "CAARecord",
    "CNAMERecord",
    "DNAMERecord",
    "DNSKEYRecord",
    "NSEC3PARAMRecord",
    "NSECRecord",
    "DSRecord",
    "PTRRecord",
    "SRVRecord",
    "LOCRecord",
    "NAPTRRecord",
    "HINFORecord",
    "RPRecord",
    "DLVRecord",
    "SSHFPRecord",
    "DHCIDRecord",
    "TLSARecord",
    "NSAPRecord",
    "NULLRecord",
    "Audit",
    "DnsLookupResponse",
    "ErrorMessage",
    "parse_lookup_envelope",
    "format_api_time",
    "parse_api_time",
]
