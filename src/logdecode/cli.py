"""logdecode CLI — entry point.

Commands:
    logdecode formats                 List accepted format names
    logdecode decode  [FILE]          Decode every line of a file (or stdin)
    logdecode check   <line>          Decode a single line given on the command line
"""
from __future__ import annotations

import json
import logging
import sys
from collections import Counter
from typing import Any, BinaryIO

import click
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .config import settings
from .errors import DecodeError, UnknownFormatError
from .parsers.base import LineDecoder
from .parsers.registry import default_registry

console = Console()
err_console = Console(stderr=True)

# ── Helpers ─────────────────────────────────────────────────────────────────


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def _decoder_option(ctx: click.Context, param: click.Parameter, value: str) -> LineDecoder:
    """Turn --format into a bound decoder, or fail as a usage error."""
    try:
        return default_registry.request_format(value)
    except UnknownFormatError as exc:
        raise click.BadParameter(str(exc), ctx=ctx, param=param) from None


def _format_option(func: Any) -> Any:
    return click.option(
        "--format", "-f", "decoder",
        default=lambda: settings.default_format,
        callback=_decoder_option,
        help="Format name or alias (see `logdecode formats`).",
        show_default=settings.default_format,
    )(func)


def _printable(value: object) -> str:
    """Text safe for the terminal; undecodable input bytes show as ``\\xNN``."""
    return str(value).encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")


def _report_failure(line_number: int | None, error: DecodeError) -> None:
    err_console.print(
        f"[yellow]line {line_number}[/yellow] "
        f"[red]{error.kind}[/red] {escape(_printable(error))}"
    )


def _records_table(records: list[dict[str, Any]], title: str) -> Table:
    tbl = Table(title=title, box=box.ROUNDED, show_lines=False, highlight=True)
    for col in records[0]:
        tbl.add_column(col, overflow="fold", max_width=70)
    for record in records:
        tbl.add_row(*[escape(_printable(v)) for v in record.values()])
    return tbl


# ── CLI root ─────────────────────────────────────────────────────────────────


@click.group()
@click.version_option(version=__version__, prog_name="logdecode")
@click.option("--verbose", "-v", is_flag=True, help="Log decoder activity to stderr.")
def main(verbose: bool) -> None:
    """logdecode — decode structured log lines into typed records."""
    _setup_logging(verbose)


# ── formats ──────────────────────────────────────────────────────────────────


@main.command()
def formats() -> None:
    """List canonical formats and their aliases."""
    tbl = Table(title="Supported formats", box=box.ROUNDED)
    tbl.add_column("name")
    tbl.add_column("canonical")
    for canonical in default_registry.canonical_formats():
        tbl.add_row(canonical, canonical)
    for alias, canonical in default_registry.supported():
        tbl.add_row(alias, canonical)
    console.print(tbl)


# ── decode ───────────────────────────────────────────────────────────────────


@main.command()
@click.argument("file", type=click.File("rb"), default="-")
@_format_option
@click.option(
    "--output", "-o", "output_fmt", default="json",
    type=click.Choice(["json", "table"], case_sensitive=False),
    help="Output format.",
    show_default=True,
)
@click.option("--limit", "-n", default=0, type=int, help="Max records to emit (0 = all).")
@click.option(
    "--skip-invalid/--strict", default=lambda: settings.skip_invalid,
    help="Skip lines that fail to decode, or stop at the first one.",
)
def decode(
    file: BinaryIO,
    decoder: LineDecoder,
    output_fmt: str,
    limit: int,
    skip_invalid: bool,
) -> None:
    """Decode each line of FILE (default: stdin).

    \b
    Examples:
      logdecode decode /var/log/remote.log
      logdecode decode remote.log --format rfc5424 --output table
      tail -f remote.log | logdecode decode --strict
    """
    records: list[dict[str, Any]] = []
    failures: Counter[str] = Counter()
    emitted = 0

    for outcome in decoder.decode_lines(file):
        if outcome.error is not None:
            failures[outcome.error.kind] += 1
            if sum(failures.values()) <= settings.max_errors_shown:
                _report_failure(outcome.line_number, outcome.error)
            if not skip_invalid:
                err_console.print("[red]Stopping at first invalid line (--strict).[/red]")
                sys.exit(1)
            continue

        entry = outcome.record.as_dict()
        if output_fmt == "json":
            click.echo(json.dumps(entry))
        else:
            records.append(entry)
        emitted += 1
        if limit and emitted >= limit:
            break

    if output_fmt == "table":
        if records:
            console.print(_records_table(records, title=f"{decoder.fmt} records"))
        else:
            err_console.print("[yellow]No records decoded.[/yellow]")

    total_failed = sum(failures.values())
    summary = f"[dim]Decoded {emitted} records, {total_failed} failed"
    if failures:
        kinds = ", ".join(f"{kind}={n}" for kind, n in failures.most_common())
        summary += f" ({kinds})"
    err_console.print(summary + "[/dim]")


# ── check ────────────────────────────────────────────────────────────────────


@main.command()
@click.argument("line")
@_format_option
def check(line: str, decoder: LineDecoder) -> None:
    """Decode a single LINE and print it as JSON.

    \b
    Examples:
      logdecode check '<134>1 2003-08-24T05:14:15Z ubuntu sshd 1999 - ok'
    """
    try:
        record = decoder.decode(line)
    except DecodeError as exc:
        err_console.print(f"[red]{exc.kind}[/red] at byte {exc.position}: {escape(_printable(exc))}")
        sys.exit(1)
    click.echo(json.dumps(record.as_dict(), indent=2))


if __name__ == "__main__":
    main()
