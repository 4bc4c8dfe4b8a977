"""Tests for CLI commands with mocked dependencies."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

from typer.testing import CliRunner

from live_edge.cli import app
from live_edge.leagues import NBA, NCAAB
from live_edge.signals.models import SignalStatus

runner = CliRunner()


def _mock_tracker(**methods):
    tracker = MagicMock()
    for name, value in methods.items():
        setattr(tracker, name, AsyncMock(return_value=value))
    return tracker


class TestRunCommand:
    def test_unknown_league(self):
        result = runner.invoke(app, ["run", "--league", "wnba", "--once"])
        assert result.exit_code == 2
        assert "Unknown league" in result.output

    def test_run_once_both_leagues(self):
        settings = MagicMock()
        settings.telegram_enabled = False
        settings.bankroll = 20000.0
        settings.refresh_interval = 30.0
        with patch("live_edge.config.get_settings", return_value=settings), \
                patch("live_edge.engine.LiveEngine") as mock_engine:
            mock_engine.return_value.run = AsyncMock()
            result = runner.invoke(app, ["run", "--once"])

        assert result.exit_code == 0
        assert "NBA, NCAAB" in result.output
        assert mock_engine.call_args.args[0] == [NBA, NCAAB]
        assert mock_engine.call_args.kwargs["notifier"] is None
        mock_engine.return_value.run.assert_awaited_once_with(once=True)


class TestSignalsCommand:
    def test_json_output(self, make_signal):
        tracker = _mock_tracker(get_signals=[make_signal()])
        with patch("live_edge.signals.tracker.SignalTracker", return_value=tracker):
            result = runner.invoke(app, ["signals", "--output", "json"])

        assert result.exit_code == 0
        assert "bet_team" in result.output
        tracker.get_signals.assert_awaited_once_with(league=None, status=None)

    def test_open_filter(self, make_signal):
        tracker = _mock_tracker(get_signals=[])
        with patch("live_edge.signals.tracker.SignalTracker", return_value=tracker):
            result = runner.invoke(app, ["signals", "--league", "ncaab", "--open"])

        assert result.exit_code == 0
        assert "No signals recorded" in result.output
        tracker.get_signals.assert_awaited_once_with(league="ncaab", status=SignalStatus.OPEN)

    def test_csv_output(self, make_signal):
        tracker = _mock_tracker(get_signals=[make_signal()])
        with patch("live_edge.signals.tracker.SignalTracker", return_value=tracker):
            result = runner.invoke(app, ["signals", "-o", "csv"])

        assert result.exit_code == 0
        assert "key,league,game" in result.output


class TestStatsCommand:
    def test_stats(self):
        summary = {
            "total_signals": 12,
            "open": 2,
            "resolved": 10,
            "wins": 6,
            "win_rate": 0.6,
            "total_pnl": 1234.5,
            "roi": 0.08,
            "avg_lec_5": 4.5,
            "avg_lec_10": None,
        }
        tracker = _mock_tracker(get_performance_summary=summary)
        with patch("live_edge.signals.tracker.SignalTracker", return_value=tracker):
            result = runner.invoke(app, ["stats"])

        assert result.exit_code == 0
        assert "Total signals logged: 12" in result.output
        assert "60.0%" in result.output
        assert "$1,234.50" in result.output
        assert "Avg 5-min line move: +4.5" in result.output
        assert "10-min" not in result.output

    def test_stats_no_history(self):
        summary = {
            "total_signals": 0, "open": 0, "resolved": 0, "wins": 0, "win_rate": None,
            "total_pnl": 0.0, "roi": None, "avg_lec_5": None, "avg_lec_10": None,
        }
        tracker = _mock_tracker(get_performance_summary=summary)
        with patch("live_edge.signals.tracker.SignalTracker", return_value=tracker):
            result = runner.invoke(app, ["stats"])

        assert result.exit_code == 0
        assert "N/A" in result.output
