"""Command-line interface for Stock Pulse."""

import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

import click
import pandas as pd
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .analyzer import analyze_series
from .config import get_config
from .data.models import AnalysisResult, PriceSeries, SentimentLabel, Signal, Verdict
from .data.yahoo import YahooChartClient
from .errors import MalformedInputError, StockPulseError

console = Console()
err_console = Console(stderr=True)

CSV_COLUMNS = ["timestamp", "open", "high", "low", "close", "volume"]


def setup_logging(verbose: bool):
    """Configure logging based on verbosity."""
    config = get_config()
    logging.basicConfig(level=logging.WARNING, format=config.log_format)
    level = logging.DEBUG if verbose else getattr(logging, config.log_level.upper(), logging.WARNING)
    logging.getLogger("stock_pulse").setLevel(level)


def format_signal(signal: Signal, confidence: int) -> Text:
    """Format overall signal with color coding."""
    colors = {Signal.BUY: "green", Signal.SELL: "red", Signal.HOLD: "yellow"}
    return Text(f"{signal.value} ({confidence}%)", style=f"bold {colors[signal]}")


def format_verdict(verdict: Verdict) -> Text:
    colors = {Verdict.BUY: "green", Verdict.SELL: "red", Verdict.NEUTRAL: "yellow"}
    return Text(verdict.value, style=colors[verdict])


def format_sentiment(label: SentimentLabel, score: float) -> Text:
    """Format sentiment with color coding."""
    if label in (SentimentLabel.VERY_BULLISH, SentimentLabel.BULLISH):
        color = "green"
    elif label in (SentimentLabel.VERY_BEARISH, SentimentLabel.BEARISH):
        color = "red"
    else:
        color = "yellow"
    return Text(f"{label.value} ({score:.1f})", style=f"bold {color}")


def format_value(value: Optional[float], digits: int = 2) -> str:
    return "-" if value is None else f"{value:.{digits}f}"


def display_result(result: AnalysisResult):
    """Display one analysis result in rich format."""
    header = Text()
    header.append(result.symbol, style="bold white")
    if result.name and result.name != result.symbol:
        header.append(f" - {result.name}", style="dim")

    change_color = "green" if result.change >= 0 else "red"
    price_text = Text()
    price_text.append(f"{result.current_price:.2f} {result.currency} ", style="bold")
    price_text.append(
        f"({result.change:+.2f} / {result.change_percent:+.2f}%)", style=change_color
    )

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Label", style="dim")
    table.add_column("Value")

    table.add_row("Price", price_text)
    table.add_row("Day Range", f"{result.day_low:.2f} - {result.day_high:.2f}")
    table.add_row(
        "52W Range", f"{result.fifty_two_week_low:.2f} - {result.fifty_two_week_high:.2f}"
    )
    table.add_row("Volume", f"{result.volume:,}")
    table.add_row("Signal", format_signal(result.signal.signal, result.signal.confidence))
    table.add_row(
        "Sentiment", format_sentiment(result.sentiment.label, result.sentiment.score)
    )

    ind = result.indicators
    table.add_row(
        "MA 20/50/200",
        f"{format_value(ind.ma20)} / {format_value(ind.ma50)} / {format_value(ind.ma200)}",
    )
    table.add_row("RSI", format_value(ind.rsi, 1))
    table.add_row(
        "MACD",
        f"{format_value(ind.macd, 4)} sig {format_value(ind.macd_signal, 4)} "
        f"hist {format_value(ind.macd_histogram, 4)}",
    )
    table.add_row(
        "Bollinger",
        f"{format_value(ind.bollinger_lower)} / {format_value(ind.bollinger_middle)} / "
        f"{format_value(ind.bollinger_upper)}",
    )

    levels = result.support_resistance
    table.add_row("Support", ", ".join(f"{p:.2f}" for p in levels.support) or "-")
    table.add_row("Resistance", ", ".join(f"{p:.2f}" for p in levels.resistance) or "-")

    breakdown = Table(show_header=True, box=None, padding=(0, 2))
    breakdown.add_column("Indicator", style="bold")
    breakdown.add_column("Verdict")
    breakdown.add_column("Reason", style="dim")
    signals = result.signal.signals
    for label, item in (
        ("MA Crossover", signals.ma_crossover),
        ("RSI", signals.rsi),
        ("MACD", signals.macd),
        ("Bollinger", signals.bollinger),
    ):
        breakdown.add_row(label, format_verdict(item.verdict), item.reason)

    outer = Table.grid(padding=(1, 0))
    outer.add_row(table)
    outer.add_row(breakdown)

    console.print(
        Panel(
            outer,
            title=header,
            subtitle=f"Generated: {result.generated_at.strftime('%Y-%m-%d %H:%M:%S')} UTC",
            border_style="blue",
        )
    )


def emit(result: AnalysisResult, json_output: bool):
    if json_output:
        console.print_json(result.model_dump_json(indent=2))
    else:
        display_result(result)


def load_csv(path: Path, symbol: str) -> PriceSeries:
    """
    Read an OHLCV CSV into a PriceSeries.

    Rows with an empty field are skipped.

    Raises:
        click.BadParameter: if a required column is missing
        MalformedInputError: if the file cannot be parsed or a row holds a
            non-numeric, non-finite or negative-volume value
    """
    try:
        df = pd.read_csv(path)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise MalformedInputError(f"Could not read {path.name}: {e}") from e

    df.columns = [str(c).strip().lower() for c in df.columns]
    missing = [c for c in CSV_COLUMNS if c not in df.columns]
    if missing:
        raise click.BadParameter(f"missing columns: {', '.join(missing)}", param_hint="PATH")

    df = df.dropna(subset=CSV_COLUMNS)

    columns = {}
    for name in CSV_COLUMNS:
        numeric = pd.to_numeric(df[name], errors="coerce")
        invalid = numeric.isna()
        if invalid.any():
            row = invalid.idxmax()
            # header is line 1
            raise MalformedInputError(
                f"{path.name} line {row + 2}: non-numeric {name} {df[name].loc[row]!r}"
            )
        columns[name] = numeric.tolist()

    return PriceSeries.from_arrays(
        symbol,
        columns["timestamp"],
        columns["open"],
        columns["high"],
        columns["low"],
        columns["close"],
        columns["volume"],
    )


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Enable verbose logging")
@click.pass_context
def main(ctx, verbose):
    """Stock Pulse - technical indicators and trading signals."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    setup_logging(verbose)


@main.command()
@click.argument("symbol")
@click.option("--interval", default=None, help="Bar interval (default 15m)")
@click.option("--range", "range_", default=None, help="History range (default 5d)")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def analyze(symbol: str, interval: Optional[str], range_: Optional[str], json_output: bool):
    """Fetch SYMBOL from the quote provider and analyze it."""

    async def fetch():
        async with YahooChartClient() as client:
            return await client.get_price_series(symbol, interval, range_)

    try:
        series, meta = asyncio.run(fetch())
        result = analyze_series(series, meta=meta)
    except StockPulseError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    emit(result, json_output)


@main.command("analyze-csv")
@click.argument("path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--symbol", default=None, help="Symbol to report (default: file name)")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def analyze_csv(path: Path, symbol: Optional[str], json_output: bool):
    """Analyze an OHLCV CSV file (timestamp,open,high,low,close,volume)."""
    try:
        series = load_csv(path, symbol or path.stem.upper())
        result = analyze_series(series)
    except StockPulseError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    emit(result, json_output)


if __name__ == "__main__":
    main()
