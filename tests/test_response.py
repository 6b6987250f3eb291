import datetime as dt
import json

import pytest

from dnslookup.errors import RecordDecodeError, RemoteApiError, ResponseParseError
from dnslookup.records.response import (
    Audit,
    DnsLookupResponse,
    ErrorMessage,
    parse_lookup_envelope,
)

from .conftest import A_RECORD, NS_RECORD, lookup_body

UTC = dt.timezone.utc


class TestParseLookupEnvelope:
    def test_success(self, success_body):
        envelope = parse_lookup_envelope(success_body)

        assert envelope.data.domain_name == "whoisxmlapi.com"
        assert envelope.data.types == (1, 2)
        assert envelope.data.dns_types == "A,NS"
        assert envelope.data.audit.updated_date == dt.datetime(2022, 7, 12, 11, 46, 25, tzinfo=UTC)
        assert len(envelope.data.dns_records) == 2
        assert not envelope.error.is_error

    def test_error_block(self):
        envelope = parse_lookup_envelope(
            b'{"ErrorMessage": {"errorCode": "WHOIS_01", "msg": "Invalid API key"}}'
        )

        assert envelope.error == ErrorMessage(code="WHOIS_01", message="Invalid API key")
        assert envelope.data == DnsLookupResponse()

    @pytest.mark.parametrize(
        "body",
        [b"{}", b'{"DNSData": null}', b'{"DNSData": {"dnsRecords": null}}'],
    )
    def test_missing_blocks_keep_zero_values(self, body):
        envelope = parse_lookup_envelope(body)

        assert envelope.data.domain_name == ""
        assert len(envelope.data.dns_records) == 0
        assert not envelope.error.is_error

    def test_raw_record_bytes_survive(self):
        body = b'{"DNSData": {"dnsRecords": [{"dnsType":"A",   "address":"10.0.0.1"}]}}'

        records = parse_lookup_envelope(body).data.dns_records

        assert records.all[0].raw == b'{"dnsType":"A",   "address":"10.0.0.1"}'

    @pytest.mark.parametrize(
        "body",
        [
            b"not json",
            b"[]",
            b'{"DNSData": []}',
            b'{"DNSData": {"domainName": 12}}',
            b'{"DNSData": {"types": ["A"]}}',
            b'{"DNSData": {"dnsRecords": {}}}',
            b'{"DNSData": {"audit": {"createdDate": "July 12th"}}}',
            b'{"ErrorMessage": {"errorCode": 1}}',
        ],
    )
    def test_malformed_body(self, body):
        with pytest.raises(ResponseParseError):
            parse_lookup_envelope(body)


class TestAudit:
    def test_empty_dates_are_none(self):
        assert Audit.from_json({"createdDate": "", "updatedDate": None}) == Audit()

    def test_bad_date(self):
        with pytest.raises(RecordDecodeError) as exc_info:
            Audit.from_json({"createdDate": "yesterday"})

        assert "createdDate" in str(exc_info.value)

    def test_to_json(self):
        audit = Audit(created_date=dt.datetime(2006, 1, 2, 15, 4, 5, tzinfo=UTC))

        assert audit.to_json() == {"createdDate": "2006-01-02 15:04:05 UTC", "updatedDate": ""}


class TestDnsLookupResponse:
    def test_to_json(self):
        data = parse_lookup_envelope(lookup_body([A_RECORD, NS_RECORD])).data

        payload = json.loads(data.to_json())

        assert payload["domainName"] == "whoisxmlapi.com"
        assert payload["types"] == [1, 2]
        assert payload["audit"]["createdDate"] == "2022-07-12 11:46:25 UTC"
        assert [entry["raw"] for entry in payload["dnsRecords"]] == [A_RECORD, NS_RECORD]

    def test_empty_response_encodes_empty_records(self):
        assert json.loads(DnsLookupResponse().to_json())["dnsRecords"] == []

    def test_from_json(self):
        data = DnsLookupResponse.from_json('{"domainName": "example.com", "dnsRecords": []}')

        assert data.domain_name == "example.com"
        assert len(data.dns_records) == 0

    def test_from_json_rejects_non_objects(self):
        with pytest.raises(RecordDecodeError):
            DnsLookupResponse.from_json("[1]")


class TestErrorMessage:
    def test_to_exception(self):
        exc = ErrorMessage(code="DNS_02", message="bad domain").to_exception()

        assert isinstance(exc, RemoteApiError)
        assert exc.code == "DNS_02"

    def test_blank_is_not_an_error(self):
        assert not ErrorMessage.from_json(None).is_error
