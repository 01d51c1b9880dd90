"""
Live tracking module.

Usage:
    from snowtrack.features.tracking import TrackingSession, LocationSample
    from snowtrack.features.tracking import PauseClock

Components:
- TrackingSession: Lifecycle state machine, owns the route
- StatsAggregator: Builds LiveStats snapshots per sample
- RunDetector: Downhill run segmentation
- PauseClock: Caller-side paused time accounting
- LocationSource / ReplaySource: Sample source contract
"""

from .schemas import LocationSample, Run, LiveStats, SnowboardSession
from .runs import RunDetector
from .stats import StatsAggregator
from .source import (
    LocationSource,
    ReplaySource,
    Subscription,
    TrackingError,
    PermissionDenied,
    SampleSourceFailure,
)
from .session import TrackingSession, StopResult, SessionTooShort
from .pause import PauseClock

__all__ = [
    # Schemas
    "LocationSample",
    "Run",
    "LiveStats",
    "SnowboardSession",
    # Engine
    "RunDetector",
    "StatsAggregator",
    "TrackingSession",
    "StopResult",
    "PauseClock",
    # Sources
    "LocationSource",
    "ReplaySource",
    "Subscription",
    # Errors
    "TrackingError",
    "PermissionDenied",
    "SampleSourceFailure",
    "SessionTooShort",
]
