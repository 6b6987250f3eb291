import json

import httpx
import pytest

from dnslookup import DnsLookupClient
from dnslookup.api.client import API_KEY_ENV
from dnslookup.cli.app import LookupArgs, LookupCommand, main
from dnslookup.core import disable_lib_logger

from .conftest import API_KEY, BASE_URL


@pytest.fixture(autouse=True)
def quiet_logger():
    yield
    disable_lib_logger()


@pytest.fixture
def serve(monkeypatch):
    '''
    Routes the CLI's client through a mock transport answering with `body`.
    '''
    def install(body: bytes, status: int = 200) -> None:
        def make_client(self) -> DnsLookupClient:
            http = httpx.AsyncClient(
                transport=httpx.MockTransport(lambda request: httpx.Response(status, content=body))
            )
            return DnsLookupClient(API_KEY, base_url=BASE_URL, client=http)

        monkeypatch.setattr(LookupCommand, "make_client", make_client)

    return install


class TestCLI:
    def test_table_output(self, serve, success_body, capsys):
        serve(success_body)

        assert main(["whoisxmlapi.com"]) == 0

        out = capsys.readouterr().out
        assert "104.26.13.210" in out
        assert "adi.ns.cloudflare.com." in out

    def test_json_output(self, serve, success_body, capsys):
        serve(success_body)

        assert main(["whoisxmlapi.com", "--json"]) == 0

        payload = json.loads(capsys.readouterr().out)
        assert payload["domainName"] == "whoisxmlapi.com"
        assert [entry["CommonFields"]["dnsType"] for entry in payload["dnsRecords"]] == ["A", "NS"]

    def test_raw_output(self, serve, capsys):
        serve(b"<DNSData/>")

        assert main(["whoisxmlapi.com", "--raw", "--output-format", "xml"]) == 0
        assert "<DNSData/>" in capsys.readouterr().out

    def test_api_error_exit_code(self, serve, capsys):
        serve(json.dumps({"ErrorMessage": {"errorCode": "WHOIS_01", "msg": "Invalid API key"}}).encode())

        assert main(["whoisxmlapi.com"]) == 1
        assert "WHOIS_01" in capsys.readouterr().out

    def test_missing_api_key(self, monkeypatch, capsys):
        monkeypatch.delenv(API_KEY_ENV, raising=False)

        assert main(["whoisxmlapi.com"]) == 1
        assert API_KEY_ENV in capsys.readouterr().out

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])

        assert exc_info.value.code == 0
        assert "dnslookup" in capsys.readouterr().out


class TestLookupArgs:
    def test_query_options(self):
        args = LookupArgs(domain="example.com", record_types="a,mx", callback="cb")
        params = httpx.QueryParams()
        for option in args.query_options():
            params = option(params)

        assert params["type"] == "A,MX"
        assert params["callback"] == "cb"
        assert "outputFormat" not in params

    def test_show_masks_api_key(self):
        args = LookupArgs(domain="example.com", api_key="super-secret")

        assert "super-secret" not in args.show()
        assert "example.com" in args.show()
