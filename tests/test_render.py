import io
import json

from rich.console import Console

from dnslookup.cli.render import record_value, render_lookup
from dnslookup.records.decoder import decode_records
from dnslookup.records.response import parse_lookup_envelope

from .conftest import A_RECORD, lookup_body


def render_text(renderable) -> str:
    console = Console(file=io.StringIO(), width=200, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


class TestRenderLookup:
    def test_markup_in_record_fields_is_printed_literally(self):
        records = [
            {"dnsType": "[/x]", "name": "[bold]odd.example.[/bold]", "ttl": 5},
            {**A_RECORD, "name": "[/]", "rawText": "a.\t1\tIN\tA\t[red]10.0.0.1"},
        ]
        response = parse_lookup_envelope(lookup_body(records, domain="[b]x.com")).data

        out = render_text(render_lookup(response))

        assert "[/x]" in out
        assert "[bold]odd.example.[/bold]" in out
        assert "[/]" in out
        assert "[red]10.0.0.1" in out
        assert "[b]x.com" in out

    def test_error_rows_counted(self):
        response = parse_lookup_envelope(lookup_body([A_RECORD, {"dnsType": "SPF"}])).data

        out = render_text(render_lookup(response))

        assert "not decoded" in out
        assert "unknown DNS type" in out


class TestRecordValue:
    def test_rdata_of_zone_line(self):
        record = decode_records(json.dumps([A_RECORD])).all[0]

        assert record_value(record) == "104.26.13.210"

    def test_short_line_kept_whole(self):
        record = decode_records('[{"dnsType": "A", "rawText": "odd"}]').all[0]

        assert record_value(record) == "odd"
