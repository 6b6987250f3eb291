import json
from collections.abc import Callable

import httpx
import pytest

from dnslookup import DnsLookupClient

API_KEY = "test-key"
BASE_URL = "https://dns.example.test/DNSService"

A_RECORD = {
    "type": 1,
    "dnsType": "A",
    "name": "whoisxmlapi.com.",
    "ttl": 300,
    "rRsetType": 1,
    "rawText": "whoisxmlapi.com.\t300\tIN\tA\t104.26.13.210",
    "address": "104.26.13.210",
}

NS_RECORD = {
    "type": 2,
    "dnsType": "NS",
    "name": "whoisxmlapi.com.",
    "ttl": 21600,
    "rRsetType": 2,
    "rawText": "whoisxmlapi.com.\t21600\tIN\tNS\tadi.ns.cloudflare.com.",
    "target": "adi.ns.cloudflare.com.",
}


def lookup_body(records: list, *, domain: str = "whoisxmlapi.com") -> bytes:
    return json.dumps(
        {
            "DNSData": {
                "domainName": domain,
                "types": [1, 2],
                "dnsTypes": "A,NS",
                "audit": {
                    "createdDate": "2022-07-12 11:46:25 UTC",
                    "updatedDate": "2022-07-12 11:46:25 UTC",
                },
                "dnsRecords": records,
            }
        }
    ).encode()


@pytest.fixture
def success_body() -> bytes:
    return lookup_body([A_RECORD, NS_RECORD])


@pytest.fixture
def make_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], DnsLookupClient]:
    '''
    Builds a client whose requests are answered by `handler`.
    '''
    def factory(handler) -> DnsLookupClient:
        http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return DnsLookupClient(API_KEY, base_url=BASE_URL, client=http)

    return factory
