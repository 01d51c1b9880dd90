"""
Tests for PauseClock and paused-time adjustment of sessions.
"""

from snowtrack.features.tracking import PauseClock, SnowboardSession, LiveStats


def _session(duration_s: int) -> SnowboardSession:
    return SnowboardSession.from_stats(LiveStats(duration_s=duration_s, distance_m=500), route=[], runs=[])


class TestPauseClock:
    """Tests for pause accounting."""

    def test_accumulates_intervals(self):
        clock = PauseClock()
        clock.pause(1_000)
        clock.resume(4_000)
        clock.pause(10_000)
        clock.resume(12_500)
        assert clock.paused_ms == 5_500
        assert not clock.is_paused

    def test_double_pause_keeps_first_start(self):
        clock = PauseClock()
        clock.pause(1_000)
        clock.pause(3_000)
        clock.resume(5_000)
        assert clock.paused_ms == 4_000

    def test_resume_without_pause_is_noop(self):
        clock = PauseClock()
        clock.resume(5_000)
        assert clock.paused_ms == 0

    def test_open_pause_counted_until_now(self):
        clock = PauseClock()
        clock.pause(1_000)
        assert clock.is_paused
        assert clock.paused_ms_at(3_000) == 2_000
        assert clock.paused_ms == 0

    def test_reset(self):
        clock = PauseClock()
        clock.pause(0)
        clock.resume(1_000)
        clock.reset()
        assert clock.paused_ms == 0
        assert not clock.is_paused


class TestApplyToSession:
    """Paused time is subtracted from the engine duration."""

    def test_apply(self):
        clock = PauseClock()
        clock.pause(0)
        clock.resume(3_000)

        adjusted = clock.apply(_session(10))

        assert adjusted.duration_s == 7
        assert adjusted.distance_m == 500

    def test_apply_with_open_pause(self):
        clock = PauseClock()
        clock.pause(2_000)
        adjusted = clock.apply(_session(10), now_ms=6_500)
        assert adjusted.duration_s == 5

    def test_original_session_unchanged(self):
        session = _session(10)
        session.with_paused_time(4_000)
        assert session.duration_s == 10

    def test_never_negative(self):
        assert _session(3).with_paused_time(10_000).duration_s == 0
