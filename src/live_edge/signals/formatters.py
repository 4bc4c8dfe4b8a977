"""Signal output formatters: log lines, Rich table, JSON, CSV, Telegram."""

from __future__ import annotations

import csv
import io
import json
from datetime import datetime, timezone

from rich.console import Console
from rich.table import Table

from live_edge.signals.models import Signal


def _price(price: int) -> str:
    return f"+{price}" if price > 0 else str(price)


def format_signal_line(signal: Signal) -> str:
    """One-line summary logged when a signal is issued."""
    types = " + ".join(signal.signal_types)
    flags = ""
    if signal.is_combined:
        flags += " [COMBINED]"
    if signal.home_court_edge:
        flags += " [HOME COURT]"
    return (
        f"[{signal.league.upper()}] SIGNAL: {signal.game} {signal.away_score}-{signal.home_score} "
        f"{signal.period_label} {signal.clock} | BET {signal.bet_team} {signal.rec_type} "
        f"@ {_price(signal.market_price)} | {signal.urgency} | "
        f"Kelly: ${signal.kelly_stake:.0f} ({signal.kelly_pct:.2f}%) | {types}{flags}"
    )


def format_resolution_line(signal: Signal) -> str:
    """One-line summary logged when a signal is resolved."""
    pnl = signal.pnl or 0.0
    sign = "+" if pnl > 0 else ""
    return (
        f"[{signal.league.upper()}] RESOLVED: {signal.game} -> "
        f"{signal.final_away_score}-{signal.final_home_score} | "
        f"{signal.bet_team} {signal.result} | P&L: {sign}${pnl:.0f}"
    )


def format_table(signals: list[Signal], console: Console | None = None) -> None:
    """Print signals as a Rich table, newest first."""
    if console is None:
        console = Console()

    if not signals:
        console.print("[yellow]No signals recorded.[/yellow]")
        return

    ordered = sorted(signals, key=lambda s: s.issued_at, reverse=True)

    table = Table(
        title="Live Edge Signals",
        caption=f"Generated at {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}",
        show_lines=True,
    )
    table.add_column("League", width=6)
    table.add_column("Game", width=13)
    table.add_column("Score", justify="right", width=9)
    table.add_column("Bet", style="bold", width=6)
    table.add_column("Price", justify="right", width=6)
    table.add_column("Stake", justify="right", width=7)
    table.add_column("Tier", width=10)
    table.add_column("Signals", width=22, no_wrap=False)
    table.add_column("LEC 5/10", justify="right", width=9)
    table.add_column("Result", width=8)

    for s in ordered:
        lec = "/".join("-" if v is None else f"{v:+d}" for v in (s.lec_5, s.lec_10))
        if s.result is None:
            result = "[dim]open[/dim]"
        else:
            color = "green" if s.result == "WIN" else "red"
            result = f"[{color}]{s.result}[/{color}]"
        table.add_row(
            s.league.upper(),
            s.game,
            f"{s.away_score}-{s.home_score} {s.period_label}",
            s.bet_team,
            _price(s.market_price),
            f"${s.kelly_stake:.0f}",
            s.urgency,
            " + ".join(s.signal_types) + (" *" if s.is_combined else ""),
            lec,
            result,
        )

    console.print(table)
    console.print(f"\n[dim]{len(signals)} signal(s) total[/dim]")


def format_json(signals: list[Signal]) -> str:
    """Format signals as a JSON string."""
    return json.dumps([s.to_dict() for s in signals], indent=2)


def format_csv(signals: list[Signal]) -> str:
    """Format signals as CSV."""
    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow([
        "key", "league", "game", "bet_team", "fade_team", "signal_types",
        "signal_count", "is_combined", "urgency", "market_price", "implied_prob",
        "kelly_pct", "kelly_stake", "lec_5", "lec_10", "result", "pnl", "issued_at",
    ])
    for s in signals:
        writer.writerow([
            s.key, s.league, s.game, s.bet_team, s.fade_team, "|".join(s.signal_types),
            s.signal_count, s.is_combined, s.urgency, s.market_price, s.implied_prob,
            s.kelly_pct, s.kelly_stake, s.lec_5, s.lec_10, s.result, s.pnl,
            s.issued_at.isoformat(),
        ])
    return output.getvalue()


def format_telegram_signal(signal: Signal) -> str:
    """Format a single signal for Telegram (Markdown)."""
    header = "\U0001f525 *COMBINED SIGNAL*" if signal.is_combined else "\U0001f514 *SIGNAL*"
    lines = [
        header,
        "",
        f"\U0001f3c0 {signal.league.upper()} {signal.game} "
        f"{signal.away_score}-{signal.home_score} ({signal.period_label} {signal.clock})",
        f"✅ Bet *{signal.bet_team_full or signal.bet_team}* {signal.rec_type} "
        f"@ {_price(signal.market_price)}",
        f"\U0001f4b0 Kelly: ${signal.kelly_stake:.0f} ({signal.kelly_pct:.2f}% of bankroll)",
        f"⏰ {signal.urgency} | Edge: {signal.est_edge:.1f}%",
        "",
    ]
    lines.extend(f"• {e.text}" for e in signal.evidence)
    return "\n".join(lines)


def format_telegram_summary(league: str, signals: list[Signal]) -> str:
    """Format a poll summary for Telegram (Markdown)."""
    now = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M UTC")
    lines = [
        f"\U0001f4ca *{league.upper()} scan*",
        "",
        f"\U0001f550 {now}",
        f"\U0001f4c8 {len(signals)} new signal(s)",
    ]
    if signals:
        lines.append("")
        lines.append("| Game | Bet | Price | Stake |")
        for s in signals:
            lines.append(
                f"| {s.game} | {s.bet_team} | {_price(s.market_price)} | ${s.kelly_stake:.0f} |"
            )
    return "\n".join(lines)


def format_telegram_scorecard(resolved: list[Signal]) -> str:
    """Summarize freshly resolved signals for Telegram."""
    lines = [f"Resolved {len(resolved)} signal(s):"]
    total = 0.0
    for s in resolved:
        mark = "✓" if s.result == "WIN" else "✗"
        pnl = s.pnl or 0.0
        total += pnl
        lines.append(
            f"  {s.game} {s.final_away_score}-{s.final_home_score} → "
            f"{s.bet_team} {mark} ({'+' if pnl > 0 else ''}${pnl:.0f})"
        )
    lines.append("")
    lines.append(f"Net: {'+' if total > 0 else ''}${total:.0f}")
    return "\n".join(lines)
