import argparse
import asyncio
import dataclasses
import os
import sys

from loguru import logger
from rich.console import Console
from rich.markup import escape

from dnslookup.__about__ import __version__
from dnslookup.api.client import API_KEY_ENV, BASE_URL_ENV, DEFAULT_BASE_URL, DnsLookupClient
from dnslookup.api.options import Option, callback, output_format, record_type
from dnslookup.cli.internals import ArgparseModel, cli_arg, get_argparse_arguments
from dnslookup.cli.render import render_lookup
from dnslookup.core._logging import configure_lib_logger
from dnslookup.core.http.client import ClientOptions
from dnslookup.core.retries import lookup_retries
from dnslookup.errors import ArgumentError, BadStatusError, DnsLookupError, RemoteApiError


@dataclasses.dataclass
class LookupArgs(ArgparseModel):
    domain: str = cli_arg(
        "domain",
        required=True,
        help="Domain name to fetch DNS records for",
    )
    record_types: str | None = cli_arg(
        "-t", "--type",
        help="Comma separated record types, e.g. A,MX,TXT (default: all)",
    )
    raw: bool = cli_arg(
        "--raw",
        default=False,
        action="store_true",
        help="Print the undecoded API response instead of the records",
    )
    output_format: str | None = cli_arg(
        "--output-format",
        help="Response format for --raw, JSON or XML",
    )
    callback: str | None = cli_arg(
        "--callback",
        help="JSONP callback name",
    )
    as_json: bool = cli_arg(
        "--json",
        default=False,
        action="store_true",
        help="Print the decoded records as JSON",
    )
    api_key: str | None = cli_arg(
        "--api-key",
        secret=True,
        help=f"API key, falls back to ${API_KEY_ENV}",
    )
    base_url: str | None = cli_arg(
        "--base-url",
        help=f"API endpoint, falls back to ${BASE_URL_ENV} or {DEFAULT_BASE_URL}",
    )
    retries: int = cli_arg(
        "--retries",
        default=1,
        type=int,
        help="Attempts to make when the request fails in transit",
    )
    timeout: float = cli_arg(
        "--timeout",
        default=10.0,
        type=float,
        help="Request timeout in seconds",
    )
    log_level: str = cli_arg(
        "--log-level",
        default="WARNING",
        help="DEBUG, INFO, WARNING or ERROR",
    )

    def query_options(self) -> list[Option]:
        options: list[Option] = []
        if self.record_types:
            options.append(record_type(self.record_types))
        if self.output_format:
            options.append(output_format(self.output_format))
        if self.callback:
            options.append(callback(self.callback))
        return options


class LookupCommand:
    '''
    Runs one lookup and prints it.
    '''

    def __init__(self, args: LookupArgs, console: Console | None = None) -> None:
        self.args = args
        self.console = console or Console()

    def make_client(self) -> DnsLookupClient:
        api_key = self.args.api_key or os.environ.get(API_KEY_ENV, "")
        if not api_key:
            raise ArgumentError("apiKey", f"is required, pass --api-key or set {API_KEY_ENV}")

        base_url = self.args.base_url or os.environ.get(BASE_URL_ENV) or DEFAULT_BASE_URL
        options = ClientOptions(
            timeout=self.args.timeout,
            read_timeout=self.args.timeout,
        )
        return DnsLookupClient(api_key, base_url=base_url, options=options)

    async def _call(self, func, *args):
        if self.args.retries <= 1:
            return await func(*args)
        retries = lookup_retries(attempts=self.args.retries)
        return await retries.call_with_retries(func, *args)

    async def routine(self) -> None:
        options = self.args.query_options()
        async with self.make_client() as client:
            if self.args.raw:
                response = await self._call(client.get_raw, self.args.domain, *options)
                self.console.out(response.text, highlight=False)
                return

            result, _ = await self._call(client.get, self.args.domain, *options)

        if self.args.as_json:
            self.console.out(result.to_json(), highlight=False)
        else:
            self.console.print(render_lookup(result))

    def report(self, exc: DnsLookupError) -> None:
        if isinstance(exc, RemoteApiError):
            self.console.print(f"[bold red]API error[/] {escape(f'[{exc.code}] {exc.message}')}")
        elif isinstance(exc, BadStatusError):
            self.console.print(f"[bold red]HTTP {exc.status_code}[/] {escape(str(exc))}")
            if exc.body:
                self.console.out(exc.response.text, highlight=False)
        else:
            self.console.print(f"[bold red]Error:[/] {escape(str(exc))}")

    def __call__(self) -> int:
        try:
            asyncio.run(self.routine())
        except KeyboardInterrupt:
            self.console.print("\nInterrupted by user")
            return 130
        except DnsLookupError as exc:
            logger.debug("Lookup failed: {!r}", exc)
            self.report(exc)
            return 1
        return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dnslookup",
        description="Fetch the DNS records of a domain from the DNS Lookup API",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "-V", "--version",
        action="version",
        version=f"dnslookup {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = get_argparse_arguments(create_parser(), LookupArgs, argv)
    configure_lib_logger(level_name=args.log_level)
    logger.debug(args.show())
    return LookupCommand(args)()


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
