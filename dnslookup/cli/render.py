from __future__ import annotations

from rich.console import Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from dnslookup.records.decoder import DnsRecord, DnsRecords
from dnslookup.records.response import DnsLookupResponse
from dnslookup.records.timefmt import format_api_time


def record_value(record: DnsRecord) -> str:
    '''
    The RDATA part of the zone file line, i.e. `104.26.13.210` for
    `whoisxmlapi.com.  300  IN  A  104.26.13.210`.
    '''
    parts = record.common.raw_text.split('\t')
    if len(parts) >= 5:
        return '\t'.join(parts[4:])
    return record.common.raw_text


def summary_table(records: DnsRecords) -> Table:
    table = Table(title='Record Summary')
    table.add_column('Record Type', style='magenta')
    table.add_column('Count', style='green', justify='right')

    for dns_type, count in records.counts().items():
        table.add_row(dns_type, str(count))

    if errors := records.errors:
        table.add_row('[red]not decoded[/red]', f'[red]{len(errors)}[/red]')
    if not records.all:
        table.add_row('-', '0')
    return table


def records_table(records: DnsRecords) -> Table:
    table = Table(title='DNS Records')
    table.add_column('Type', style='magenta', no_wrap=True)
    table.add_column('Name', style='cyan')
    table.add_column('TTL', justify='right')
    table.add_column('Value', style='green')

    for record in records:
        if record.parse_error is not None:
            table.add_row(
                Text(record.common.dns_type or '?'),
                Text(record.common.name),
                str(record.common.ttl),
                Text(f'{record_value(record)} ({record.parse_error})', style='red'),
            )
            continue
        table.add_row(
            Text(record.common.dns_type),
            Text(record.common.name),
            str(record.common.ttl),
            Text(record_value(record)),
        )
    return table


def render_lookup(response: DnsLookupResponse) -> Group:
    audit = response.audit
    header = (
        f'[bold]Domain:[/bold] {escape(response.domain_name)}\n'
        f'[bold]Record Types:[/bold] {escape(response.dns_types) or "n/a"}\n'
        f'[bold]Collected:[/bold] {format_api_time(audit.created_date) or "n/a"}\n'
        f'[bold]Updated:[/bold] {format_api_time(audit.updated_date) or "n/a"}'
    )
    return Group(
        Panel(header, title='DNS Lookup', expand=False),
        summary_table(response.dns_records),
        records_table(response.dns_records),
    )
