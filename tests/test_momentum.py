"""Tests for score history sampling and the damage-lock detector."""

from __future__ import annotations

from live_edge.analysis.momentum import MAX_HISTORY, MomentumTracker


def _tracker_with(samples: list[tuple[float, int, int]], event_id: str = "g1") -> MomentumTracker:
    tracker = MomentumTracker()
    for ts, away, home in samples:
        tracker.record(event_id, away, home, now=ts)
    return tracker


class TestRecord:
    def test_first_sample_added(self):
        tracker = MomentumTracker()
        assert tracker.record("g1", 10, 8, now=1000.0)
        assert len(tracker.history("g1")) == 1

    def test_samples_under_25s_apart_skipped(self):
        tracker = MomentumTracker()
        tracker.record("g1", 10, 8, now=1000.0)
        assert not tracker.record("g1", 12, 8, now=1010.0)
        assert len(tracker.history("g1")) == 1

    def test_sample_after_30s_added(self):
        tracker = MomentumTracker()
        tracker.record("g1", 10, 8, now=1000.0)
        assert tracker.record("g1", 12, 8, now=1030.0)
        assert [s.away for s in tracker.history("g1")] == [10, 12]

    def test_history_capped(self):
        tracker = _tracker_with([(i * 30.0, i, 0) for i in range(20)])
        hist = tracker.history("g1")
        assert len(hist) == MAX_HISTORY
        assert hist[0].ts == 5 * 30.0

    def test_events_tracked_separately(self):
        tracker = MomentumTracker()
        tracker.record("g1", 10, 8, now=1000.0)
        assert tracker.record("g2", 4, 2, now=1005.0)
        assert tracker.history("unknown") == []


class TestDamageLock:
    # Away trails by 5, 6, 6, 7 over three minutes
    LOCKED = [(0.0, 40, 45), (60.0, 42, 48), (120.0, 44, 50), (180.0, 45, 52)]

    def test_locked(self):
        lock = _tracker_with(self.LOCKED).damage_lock("g1", "away", elapsed=20)
        assert lock.locked
        assert lock.deficit_now == 7
        assert lock.deficit_then == 5

    def test_leading_side_not_locked(self):
        assert not _tracker_with(self.LOCKED).damage_lock("g1", "home", elapsed=20).locked

    def test_too_few_samples(self):
        lock = _tracker_with(self.LOCKED[:3]).damage_lock("g1", "away", elapsed=20)
        assert not lock.locked
        assert lock.deficit_now is None

    def test_too_early_in_game(self):
        assert not _tracker_with(self.LOCKED).damage_lock("g1", "away", elapsed=14).locked

    def test_span_under_three_minutes(self):
        samples = [(i * 50.0, a, h) for i, (_, a, h) in enumerate(self.LOCKED)]
        assert not _tracker_with(samples).damage_lock("g1", "away", elapsed=20).locked

    def test_frozen_feed(self):
        samples = [(i * 60.0, 40, 45) for i in range(4)]
        assert not _tracker_with(samples).damage_lock("g1", "away", elapsed=20).locked

    def test_big_recovery_step_breaks_lock(self):
        # Deficit 8 -> 4 -> 8 -> 10: ends wider but one run cut it by 4
        samples = [(0.0, 40, 48), (60.0, 44, 48), (120.0, 44, 52), (180.0, 44, 54)]
        assert not _tracker_with(samples).damage_lock("g1", "away", elapsed=20).locked

    def test_shrinking_deficit_not_locked(self):
        samples = [(0.0, 40, 50), (60.0, 43, 51), (120.0, 45, 52), (180.0, 47, 53)]
        assert not _tracker_with(samples).damage_lock("g1", "away", elapsed=20).locked


def test_history_survives_serialization():
    tracker = _tracker_with(TestDamageLock.LOCKED)
    restored = MomentumTracker.from_dict(tracker.to_dict())
    assert restored.history("g1") == tracker.history("g1")
    assert restored.damage_lock("g1", "away", elapsed=20).locked
