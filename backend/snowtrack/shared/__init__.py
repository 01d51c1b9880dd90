"""
Shared utilities (NOT business logic).

Usage:
    from snowtrack.shared import distance, path_length, ElevationAccumulator
    from snowtrack.shared.constants import TrackingState
"""
from .geo import (
    haversine_m,
    distance,
    path_length,
    EARTH_RADIUS_M,
)
from .elevation import (
    calculate_elevation_changes,
    ElevationAccumulator,
)
from .constants import (
    TrackingState,
    DetectorState,
    SessionStatus,
    AggregationStrategy,
)
from .repository import BaseRepository

__all__ = [
    # geo
    "haversine_m",
    "distance",
    "path_length",
    "EARTH_RADIUS_M",
    # elevation
    "calculate_elevation_changes",
    "ElevationAccumulator",
    # constants
    "TrackingState",
    "DetectorState",
    "SessionStatus",
    "AggregationStrategy",
    # repository
    "BaseRepository",
]
