"""Click CLI with Rich output."""

from __future__ import annotations

import json as json_lib
import logging
import sys
from collections.abc import Iterator

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .client import Client
from .config import API_KEY_ENV, BASE_URL_ENV, DEFAULT_BASE_URL, PAGE_LIMIT, REQUEST_TIMEOUT
from .defang import refang_ip
from .errors import APIError, ReverseIPError
from .models import LookupResult
from .options import from_domain, output_format

console = Console()
err_console = Console(stderr=True)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--api-key",
    envvar=API_KEY_ENV,
    required=True,
    help=f"Reverse IP/DNS API key (or set {API_KEY_ENV}).",
)
@click.option(
    "--base-url",
    envvar=BASE_URL_ENV,
    default=DEFAULT_BASE_URL,
    show_default=True,
    help="API endpoint.",
)
@click.option(
    "--timeout",
    type=float,
    default=REQUEST_TIMEOUT,
    show_default=True,
    help="Socket timeout in seconds.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log HTTP activity.")
@click.pass_context
def cli(ctx: click.Context, api_key: str, base_url: str, timeout: float, verbose: bool):
    """reverseip: list the domains hosted on an IP address."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )
    try:
        ctx.obj = Client(api_key, base_url=base_url, timeout=timeout)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--base-url") from exc


@cli.command()
@click.argument("ip")
@click.option("--from", "start", default=None, help="Domain name to start after.")
@click.option("--all", "fetch_all", is_flag=True, help="Follow pages until the last one.")
@click.option(
    "--limit",
    type=int,
    default=PAGE_LIMIT,
    show_default=True,
    help="Records per page; a shorter page ends --all.",
)
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_obj
def lookup(client: Client, ip: str, start: str | None, fetch_all: bool, limit: int, as_json: bool):
    """Look up an IP address (supports defanged format like 8[.]8[.]8[.]8)."""
    address = refang_ip(ip)

    try:
        if fetch_all:
            results = list(iter_pages(client, address, start or "1", limit))
        else:
            options = [from_domain(start)] if start else []
            page, _ = client.get(address, *options)
            results = list(page.results)
    except ReverseIPError as exc:
        _fail(exc)

    if as_json:
        data = {
            "ip": address,
            "count": len(results),
            "results": [
                {
                    "name": r.name,
                    "first_seen": r.first_seen,
                    "last_visit": r.last_visit,
                }
                for r in results
            ],
        }
        click.echo(json_lib.dumps(data, indent=2))
        return

    if not results:
        console.print(f"[yellow]No domains found[/yellow] for [bold]{address}[/bold].")
        return

    table = Table(
        title=f"{len(results)} domain(s) on {address}",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Domain")
    table.add_column("First seen")
    table.add_column("Last visit")

    for r in results:
        table.add_row(
            r.name,
            _date(r, "first_seen"),
            _date(r, "last_visit"),
        )

    console.print(table)


@cli.command()
@click.argument("ip")
@click.option(
    "--output-format",
    "fmt",
    type=click.Choice(["JSON", "XML"], case_sensitive=False),
    default=None,
    help="Format requested from the API.",
)
@click.option("--from", "start", default=None, help="Domain name to start after.")
@click.pass_obj
def raw(client: Client, ip: str, fmt: str | None, start: str | None):
    """Print the API response body exactly as received."""
    options = []
    if fmt:
        options.append(output_format(fmt))
    if start:
        options.append(from_domain(start))

    try:
        resp = client.get_raw(refang_ip(ip), *options)
    except ReverseIPError as exc:
        if exc.response is not None and exc.response.body:
            click.echo(exc.response.text)
        _fail(exc)

    click.echo(resp.text)


def iter_pages(
    client: Client, ip: str, start: str = "1", limit: int = PAGE_LIMIT
) -> Iterator[LookupResult]:
    """Yield every record for *ip*, one page at a time.

    A page shorter than *limit* is the last one; otherwise the next page
    starts after the last domain name of the current one.
    """
    cursor = start
    while True:
        page, _ = client.get(ip, from_domain(cursor))
        yield from page.results

        if page.size < limit or not page.results:
            return
        cursor = page.results[min(page.size, len(page.results)) - 1].name


def _date(record: LookupResult, field: str) -> str:
    """Format a record timestamp as a UTC date, or as the raw number if out of range."""
    try:
        return getattr(record, f"{field}_at").strftime("%Y-%m-%d")
    except (OverflowError, OSError, ValueError):
        return str(getattr(record, field))


def _fail(exc: ReverseIPError) -> None:
    if isinstance(exc, APIError):
        err_console.print(f"[red bold]API error {exc.code}:[/red bold] {exc.message}")
    else:
        err_console.print(f"[red bold]Error:[/red bold] {exc}")
    sys.exit(1)
