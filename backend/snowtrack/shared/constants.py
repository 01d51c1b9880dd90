"""
Unified constants for tracking state and run detection.

This module provides a single source of truth for state names and
detection thresholds across the entire application.
"""

from enum import Enum


class TrackingState(str, Enum):
    """
    Lifecycle of a TrackingSession.

    IDLE -> TRACKING <-> PAUSED -> STOPPED
    """
    IDLE = "idle"
    TRACKING = "tracking"
    PAUSED = "paused"
    STOPPED = "stopped"


class DetectorState(str, Enum):
    """State of the downhill run detector."""
    FLAT = "flat"
    IN_RUN = "in_run"


class SessionStatus(str, Enum):
    """Status stored with a completed session."""
    COMPLETED = "completed"
    ACTIVE = "active"
    PAUSED = "paused"


class AggregationStrategy(str, Enum):
    """
    How LiveStats totals are produced.

    RECOMPUTE walks the whole route on every sample (reference behavior).
    INCREMENTAL keeps running sums; totals match up to float rounding.
    """
    RECOMPUTE = "recompute"
    INCREMENTAL = "incremental"


# =============================================================================
# Run detection thresholds
# =============================================================================
# Sampling is assumed to be ~1 Hz, so sample counts double as seconds.

# Drop between consecutive samples that starts a run (meters)
RUN_START_DROP_M = 2.0

# Climb between consecutive samples that ends a run (meters)
RUN_EXIT_CLIMB_M = 5.0

# Samples without a new downhill step before a run is closed
RUN_IDLE_SAMPLES = 30

# A candidate run must drop strictly more than this to be recorded (meters)
RUN_MIN_VERTICAL_DROP_M = 10.0

# Detector does not evaluate anything until this many samples arrived
RUN_MIN_STREAM_SAMPLES = 3


# =============================================================================
# Session
# =============================================================================

# Minimum route length for a session to be produced on stop
MIN_SESSION_SAMPLES = 2
