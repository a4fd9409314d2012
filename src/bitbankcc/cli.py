"""Typer-based CLI for querying the bitbank.cc API."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Awaitable, Callable, Optional, TypeVar

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .errors import BitbankError

if TYPE_CHECKING:
    from .api.client import BitbankClient

T = TypeVar("T")


# Imported lazily so --help stays fast and tests can patch these
def _load_settings(config_path: Optional[Path] = None):
    from .config import load_settings
    return load_settings(config_path)


def _create_client(settings) -> "BitbankClient":
    from .api.factory import create_client
    return create_client(settings)


def _configure_logging(secrets: list[str]):
    from .logging import configure_logging
    return configure_logging(None, secrets)


app = typer.Typer(help="bitbank.cc market data and account CLI")
console = Console()
logger = logging.getLogger(__name__)


def run_cli(argv: list[str] | None = None) -> None:
    """Run CLI with optional argv parameter."""
    app(argv)


def _run(config: Optional[Path], call: Callable[["BitbankClient"], Awaitable[T]]) -> T:
    """Load settings, run one client call, and close the client."""

    async def _go(settings) -> T:
        client = _create_client(settings)
        try:
            return await call(client)
        finally:
            await client.close()

    try:
        settings = _load_settings(config)
        _configure_logging(settings.secret_values())
        return asyncio.run(_go(settings))
    except BitbankError as e:
        logger.debug("Command failed: %s", e, exc_info=True)
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)


@app.command()
def ticker(
    pair: str = typer.Argument(..., help="Currency pair, e.g. btc_jpy"),
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
) -> None:
    """Show the latest ticker for a pair."""
    result = _run(config, lambda client: client.get_ticker(pair))

    table = Table(title=f"Ticker {pair}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green", justify="right")
    for name in ("last", "buy", "sell", "open", "high", "low", "vol"):
        value = getattr(result, name)
        table.add_row(name, "-" if value is None else str(value))
    table.add_row("timestamp", str(result.timestamp))
    console.print(table)


@app.command()
def depth(
    pair: str = typer.Argument(..., help="Currency pair, e.g. btc_jpy"),
    levels: int = typer.Option(10, min=1, help="Number of levels per side"),
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
) -> None:
    """Show the top of the order book."""
    result = _run(config, lambda client: client.get_depth(pair))

    table = Table(title=f"Depth {pair}")
    table.add_column("Bid amount", style="green", justify="right")
    table.add_column("Bid", style="green", justify="right")
    table.add_column("Ask", style="red", justify="right")
    table.add_column("Ask amount", style="red", justify="right")
    bids = result.bids[:levels]
    asks = result.asks[:levels]
    for i in range(max(len(bids), len(asks))):
        bid = bids[i] if i < len(bids) else None
        ask = asks[i] if i < len(asks) else None
        table.add_row(
            str(bid.amount) if bid else "",
            str(bid.price) if bid else "",
            str(ask.price) if ask else "",
            str(ask.amount) if ask else "",
        )
    console.print(table)


@app.command()
def candlestick(
    pair: str = typer.Argument(..., help="Currency pair, e.g. btc_jpy"),
    candle_type: str = typer.Argument(..., help="Bar interval, e.g. 1hour"),
    date: str = typer.Argument(..., help="YYYYMMDD, or YYYY for 4hour and longer"),
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
) -> None:
    """Show OHLCV bars."""
    result = _run(config, lambda client: client.get_candlestick(pair, candle_type, date))

    table = Table(title=f"Candlestick {pair} {candle_type} {date}")
    for column in ("Timestamp", "Open", "High", "Low", "Close", "Volume"):
        table.add_column(column, justify="right")
    for series in result.candlestick:
        for bar in series.ohlcv:
            table.add_row(
                str(bar.timestamp),
                str(bar.open),
                str(bar.high),
                str(bar.low),
                str(bar.close),
                str(bar.volume),
            )
    console.print(table)


@app.command()
def transactions(
    pair: str = typer.Argument(..., help="Currency pair, e.g. btc_jpy"),
    date: Optional[str] = typer.Option(None, help="YYYYMMDD; latest trades when omitted"),
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
) -> None:
    """Show executed trades."""
    result = _run(config, lambda client: client.get_transactions(pair, date))

    table = Table(title=f"Transactions {pair}")
    table.add_column("ID", style="dim")
    table.add_column("Side", style="cyan")
    table.add_column("Price", justify="right")
    table.add_column("Amount", justify="right")
    table.add_column("Executed at", style="dim")
    for trade in result.transactions:
        style = "green" if trade.side == "buy" else "red"
        table.add_row(
            str(trade.transaction_id),
            f"[{style}]{escape(trade.side)}[/{style}]",
            str(trade.price),
            str(trade.amount),
            str(trade.executed_at),
        )
    console.print(table)


@app.command()
def assets(
    show_zero: bool = typer.Option(False, help="Include assets with zero balance"),
    config: Optional[Path] = typer.Option(None, help="Path to config file"),
) -> None:
    """Show account balances (requires credentials)."""
    result = _run(config, lambda client: client.get_assets())

    table = Table(title="Assets")
    table.add_column("Asset", style="cyan")
    table.add_column("Free", style="green", justify="right")
    table.add_column("Locked", style="yellow", justify="right")
    table.add_column("On hand", justify="right")
    for item in result.assets:
        if not show_zero and not item.onhand_amount:
            continue
        table.add_row(item.asset, str(item.free_amount), str(item.locked_amount), str(item.onhand_amount))
    console.print(table)


def main():
    """CLI main entry point."""
    app()


if __name__ == "__main__":
    main()
