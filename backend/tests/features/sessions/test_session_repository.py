"""
Tests for SessionRepository.

Runs against an in-memory SQLite database through aiosqlite.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import StaticPool

from snowtrack.db.session import create_session_factory, init_db
from snowtrack.features.sessions import SessionRepository
from snowtrack.features.tracking import LiveStats, LocationSample, Run, SnowboardSession
from snowtrack.shared.constants import SessionStatus


# =============================================================================
# Helpers
# =============================================================================

def run_with_repository(test_coro):
    """Run `test_coro(repo)` against a fresh in-memory database."""
    async def runner():
        engine = create_async_engine(
            "sqlite+aiosqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        await init_db(engine)
        factory = create_session_factory(engine)
        try:
            async with factory() as db:
                return await test_coro(SessionRepository(db))
        finally:
            await engine.dispose()

    return asyncio.run(runner())


def make_session(session_id: str, date: datetime, distance_m: float = 1234.5) -> SnowboardSession:
    route = [
        LocationSample(latitude=46.5, longitude=7.9, altitude=2100.0, timestamp_ms=1_000, speed=3.2),
        LocationSample(latitude=46.5005, longitude=7.9004, altitude=None, timestamp_ms=2_000),
        LocationSample(latitude=46.501, longitude=7.9008, altitude=2080.5, timestamp_ms=3_000, speed=7.5),
    ]
    runs = [
        Run(
            start_timestamp_ms=1_000,
            end_timestamp_ms=3_000,
            start_altitude_m=2100.0,
            end_altitude_m=2080.5,
            vertical_drop_m=19.5,
            max_speed_mps=7.5,
            average_speed_mps=5.35,
            distance_m=130.0,
            sample_count=3,
        )
    ]
    stats = LiveStats(
        distance_m=distance_m,
        duration_s=600,
        current_speed_mps=7.5,
        average_speed_mps=2.06,
        max_speed_mps=11.0,
        elevation_gain_m=40.0,
        elevation_loss_m=250.0,
        number_of_runs=1,
        current_altitude_m=2080.5,
        max_altitude_m=2300.0,
        min_altitude_m=2050.0,
    )
    return SnowboardSession.from_stats(stats, route=route, runs=runs, id=session_id, date=date)


DAY = datetime(2026, 1, 15, 9, 30, tzinfo=timezone.utc)


# =============================================================================
# Tests
# =============================================================================

class TestSessionRepository:
    """Save / get / list / delete by id."""

    def test_save_and_get(self):
        original = make_session("session-1", DAY)

        async def scenario(repo):
            await repo.save(original)
            return await repo.get_session("session-1")

        loaded = run_with_repository(scenario)

        assert loaded is not None
        assert loaded.id == "session-1"
        assert loaded.date == DAY
        assert loaded.status == SessionStatus.COMPLETED
        assert loaded.stats_fields() == original.stats_fields()
        assert loaded.vertical_m == original.vertical_m
        assert loaded.route == original.route
        assert loaded.route[1].altitude is None
        assert loaded.runs == original.runs

    def test_date_round_trips_as_utc(self):
        """Dates come back timezone-aware, at the same instant as saved."""
        local = datetime(2026, 1, 15, 11, 30, tzinfo=timezone(timedelta(hours=2)))

        async def scenario(repo):
            saved = await repo.save(make_session("session-1", local))
            loaded = await repo.get_session("session-1")
            listed = await repo.list_sessions()
            return saved, loaded, listed

        saved, loaded, listed = run_with_repository(scenario)

        for session in (saved, loaded, listed[0]):
            assert session.date.tzinfo is not None
            assert session.date.utcoffset() == timedelta(0)
            assert session.date == DAY

    def test_get_missing(self):
        async def scenario(repo):
            return await repo.get_session("nope")

        assert run_with_repository(scenario) is None

    def test_save_replaces_same_id(self):
        async def scenario(repo):
            await repo.save(make_session("session-1", DAY, distance_m=100))
            await repo.save(make_session("session-1", DAY, distance_m=999))
            return await repo.list_sessions(), await repo.count()

        sessions, count = run_with_repository(scenario)

        assert count == 1
        assert sessions[0].distance_m == 999

    def test_list_newest_first(self):
        async def scenario(repo):
            await repo.save(make_session("old", DAY))
            await repo.save(make_session("new", DAY + timedelta(days=2)))
            await repo.save(make_session("mid", DAY + timedelta(days=1)))
            return await repo.list_sessions()

        sessions = run_with_repository(scenario)

        assert [s.id for s in sessions] == ["new", "mid", "old"]

    def test_delete(self):
        async def scenario(repo):
            await repo.save(make_session("a", DAY))
            await repo.save(make_session("b", DAY))
            deleted = await repo.delete_session("a")
            missing = await repo.delete_session("a")
            remaining = await repo.list_sessions()
            return deleted, missing, remaining

        deleted, missing, remaining = run_with_repository(scenario)

        assert deleted is True
        assert missing is False
        assert [s.id for s in remaining] == ["b"]

    def test_empty_list(self):
        async def scenario(repo):
            return await repo.list_sessions()

        assert run_with_repository(scenario) == []


@pytest.mark.parametrize("url,expected", [
    ("sqlite:///./snowtrack.db", "sqlite+aiosqlite:///./snowtrack.db"),
    ("postgresql://u:p@host/db", "postgresql+asyncpg://u:p@host/db"),
    ("sqlite+aiosqlite:///x.db", "sqlite+aiosqlite:///x.db"),
])
def test_async_url(url, expected):
    from snowtrack.db.session import _get_async_url
    assert _get_async_url(url) == expected
