"""Typer CLI: live-edge run, signals, stats."""

from __future__ import annotations

import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

app = typer.Typer(
    name="live-edge",
    help="Live NBA / NCAAB in-game signal engine",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


@app.command()
def run(
    league: str = typer.Option(
        "both", "--league", "-l",
        help="League to poll: nba, ncaab, both",
    ),
    once: bool = typer.Option(
        False, "--once",
        help="Poll each league once and exit",
    ),
) -> None:
    """Poll live games and issue signals until interrupted."""
    from live_edge.config import get_settings
    from live_edge.engine import LiveEngine
    from live_edge.leagues import resolve_modes
    from live_edge.notifications.telegram import TelegramNotifier

    try:
        leagues = resolve_modes(league)
    except ValueError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=2)

    settings = get_settings()
    notifier = TelegramNotifier() if settings.telegram_enabled else None
    engine = LiveEngine(leagues, notifier=notifier)

    names = ", ".join(lg.name for lg in leagues)
    console.print(
        f"[bold]Live Edge[/bold]: {names} | bankroll ${settings.bankroll:,.0f} | "
        f"every {settings.refresh_interval}s"
    )

    try:
        asyncio.run(engine.run(once=once))
    except KeyboardInterrupt:
        console.print("\n[dim]Stopped.[/dim]")


@app.command()
def signals(
    league: Optional[str] = typer.Option(
        None, "--league", "-l",
        help="Only show one league: nba, ncaab",
    ),
    open_only: bool = typer.Option(
        False, "--open",
        help="Only show unresolved signals",
    ),
    output: str = typer.Option(
        "table", "--output", "-o",
        help="Output format: table, json, csv",
    ),
) -> None:
    """Show the recorded signal log."""
    from live_edge.signals.formatters import format_csv, format_json, format_table
    from live_edge.signals.models import SignalStatus
    from live_edge.signals.tracker import SignalTracker

    async def _run() -> None:
        tracker = SignalTracker()
        status = SignalStatus.OPEN if open_only else None
        rows = await tracker.get_signals(league=league, status=status)

        if output == "json":
            console.print(format_json(rows))
        elif output == "csv":
            console.print(format_csv(rows))
        else:
            format_table(rows, console)

    asyncio.run(_run())


@app.command()
def stats(
    league: Optional[str] = typer.Option(
        None, "--league", "-l",
        help="Only summarize one league: nba, ncaab",
    ),
) -> None:
    """Show historical signal performance statistics."""

    async def _run() -> None:
        from live_edge.signals.tracker import SignalTracker

        tracker = SignalTracker()
        summary = await tracker.get_performance_summary(league=league)

        console.print("[bold]Signal Performance Summary[/bold]")
        console.print(f"  Total signals logged: {summary['total_signals']}")
        console.print(f"  Open:                 {summary['open']}")
        console.print(f"  Resolved:             {summary['resolved']}")
        if summary["win_rate"] is not None:
            console.print(f"  Win rate:             {summary['win_rate']:.1%}")
        else:
            console.print("  Win rate:             N/A (no resolved signals)")
        console.print(f"  Total P&L:            ${summary['total_pnl']:,.2f}")
        if summary["roi"] is not None:
            console.print(f"  ROI:                  {summary['roi']:.1%}")
        for horizon in (5, 10):
            value = summary[f"avg_lec_{horizon}"]
            if value is not None:
                console.print(f"  Avg {horizon}-min line move: {value:+.1f}")

    asyncio.run(_run())


if __name__ == "__main__":
    app()
