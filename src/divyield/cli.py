"""Command-line interface for divyield.

Sub-commands print JSON: one analytics record per line for ``analyze``,
and an array of ``{date, amount}`` objects for ``dividends``.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import date

import click

from divyield import __version__, create_analytics_from_env


def _parse_date(value: str | None) -> date | None:
    """Lenient date parsing: invalid input means "use the default"."""
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


@click.group()
@click.version_option(version=__version__, prog_name="divyield")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(verbose):
    """Dividend yield, frequency and insight analytics."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
    )


@main.command()
@click.argument("symbols", nargs=-1)
@click.option("--concurrent", is_flag=True, help="Analyze symbols concurrently.")
def analyze(symbols, concurrent):
    """Analyze SYMBOLS (default: the configured watchlist)."""
    analytics = create_analytics_from_env()
    targets = list(symbols) or analytics.config.symbols
    if not targets:
        raise click.UsageError("No symbols provided.")

    def report(done, total, record):
        click.echo(f"[{done}/{total}] {record.symbol}", err=True)

    records = asyncio.run(
        analytics.analyze_many(targets, concurrent=concurrent, progress=report)
    )
    for record in records:
        click.echo(json.dumps(record.to_dict()))

    failed = [r.symbol for r in records if r.error]
    if failed:
        click.echo(f"Failed: {', '.join(failed)}", err=True)


@main.command()
@click.argument("symbol")
@click.option("--from", "from_", default=None, help="Start date (YYYY-MM-DD).")
@click.option("--to", default=None, help="End date (YYYY-MM-DD).")
def dividends(symbol, from_, to):
    """Print SYMBOL's dividend history, newest first."""
    analytics = create_analytics_from_env()
    events = asyncio.run(
        analytics.dividend_history(symbol, _parse_date(from_), _parse_date(to))
    )
    click.echo(json.dumps([e.to_dict() for e in events], indent=2))


if __name__ == "__main__":
    main()
