"""
Tracking schemas.

Immutable value types flowing through the live stats engine.
"""

import math
import uuid
from datetime import datetime, timezone
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from snowtrack.shared.constants import SessionStatus


class LocationSample(BaseModel):
    """One sensor observation."""

    model_config = ConfigDict(frozen=True)

    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    altitude: Optional[float] = None   # meters, None without vertical fix
    timestamp_ms: int                  # ms since epoch
    speed: Optional[float] = None      # m/s, sensor-reported


class Run(BaseModel):
    """A completed downhill segment."""

    model_config = ConfigDict(frozen=True)

    start_timestamp_ms: int
    end_timestamp_ms: int
    start_altitude_m: float
    end_altitude_m: float
    vertical_drop_m: float
    max_speed_mps: float = 0.0
    average_speed_mps: float = 0.0
    distance_m: float = 0.0
    sample_count: int = 0

    @property
    def duration_s(self) -> float:
        return (self.end_timestamp_ms - self.start_timestamp_ms) / 1000


class LiveStats(BaseModel):
    """
    Snapshot of session statistics.

    Replaced as a whole after every ingested sample. The default
    instance is the empty snapshot (no samples yet).
    """

    model_config = ConfigDict(frozen=True)

    distance_m: float = 0.0
    duration_s: int = 0
    current_speed_mps: float = 0.0
    average_speed_mps: float = 0.0
    max_speed_mps: float = 0.0
    elevation_gain_m: float = 0.0
    elevation_loss_m: float = 0.0
    number_of_runs: int = 0
    current_altitude_m: float = 0.0
    max_altitude_m: float = 0.0
    min_altitude_m: float = 0.0

    @computed_field
    @property
    def vertical_m(self) -> float:
        """Total elevation change (gain + loss)."""
        return self.elevation_gain_m + self.elevation_loss_m

    def stats_fields(self) -> dict:
        """Plain LiveStats field values (no computed fields)."""
        return {name: getattr(self, name) for name in LiveStats.model_fields}


class SnowboardSession(LiveStats):
    """
    Completed session handed to the session store.

    Carries every LiveStats field pinned at stop time.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    date: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    route: List[LocationSample] = Field(default_factory=list)
    runs: List[Run] = Field(default_factory=list)
    status: SessionStatus = SessionStatus.COMPLETED

    @classmethod
    def from_stats(
        cls,
        stats: LiveStats,
        route: List[LocationSample],
        runs: List[Run],
        **kwargs,
    ) -> "SnowboardSession":
        """Pin a snapshot into a session record."""
        return cls(**stats.stats_fields(), route=route, runs=runs, **kwargs)

    def with_paused_time(self, paused_ms: int) -> "SnowboardSession":
        """
        Copy with paused time removed from the duration.

        The engine measures wall-clock time from start; the caller
        accumulates paused intervals and subtracts them here.
        """
        duration = math.floor((self.duration_s * 1000 - paused_ms) / 1000)
        return self.model_copy(update={"duration_s": max(0, duration)})
