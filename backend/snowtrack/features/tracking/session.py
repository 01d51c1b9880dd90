"""
Tracking Session

Top-level state machine for one live tracking run:

    IDLE -> TRACKING <-> PAUSED -> STOPPED

Owns the route buffer and start time, wires the location source to the
stats aggregator, and pushes a LiveStats snapshot to the caller's sink
after every accepted sample.

Paused time is NOT subtracted here: duration is wall-clock time since
start. Callers track paused intervals (see PauseClock) and apply them to
the SnowboardSession before persisting it.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, List, Optional

from snowtrack.shared.constants import TrackingState, MIN_SESSION_SAMPLES
from .schemas import LiveStats, LocationSample, Run, SnowboardSession
from .source import (
    LocationSource,
    Subscription,
    TrackingError,
    PermissionDenied,
    SampleSourceFailure,
)
from .stats import StatsAggregator

logger = logging.getLogger(__name__)


StatsSink = Callable[[LiveStats], object]


class SessionTooShort(TrackingError):
    """Route too short to produce a session."""
    pass


def _wall_clock_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class StopResult:
    """Route and session produced by TrackingSession.stop()."""
    route: List[LocationSample]
    session: SnowboardSession


class TrackingSession:
    """
    Live tracking session.

    Usage:
        session = TrackingSession(source=platform_source)
        session.start(on_stats)
        ...
        result = session.stop()
    """

    def __init__(
        self,
        source: Optional[LocationSource] = None,
        aggregator: Optional[StatsAggregator] = None,
        clock: Callable[[], int] = _wall_clock_ms,
        min_session_samples: int = MIN_SESSION_SAMPLES,
    ):
        """
        Args:
            source: Location source to subscribe to on start. Without one,
                the caller pushes samples through ingest() directly.
            aggregator: Stats aggregator (default: recompute strategy)
            clock: Returns current time in ms since epoch
            min_session_samples: Minimum route length accepted by stop()
        """
        self.source = source
        self.aggregator = aggregator or StatsAggregator()
        self.clock = clock
        self.min_session_samples = min_session_samples

        self._state = TrackingState.IDLE
        self._route: List[LocationSample] = []
        self._start_ms = 0
        self._sink: Optional[StatsSink] = None
        self._subscription: Optional[Subscription] = None
        # Set when the source terminated the stream mid-session
        self._source_lost = False
        self._last_snapshot = LiveStats()
        self._completed_runs: List[Run] = []

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def state(self) -> TrackingState:
        return self._state

    @property
    def start_ms(self) -> int:
        return self._start_ms

    @property
    def last_snapshot(self) -> LiveStats:
        return self._last_snapshot

    def is_tracking(self) -> bool:
        """True while TRACKING or PAUSED."""
        return self._state in (TrackingState.TRACKING, TrackingState.PAUSED)

    def current_route(self) -> List[LocationSample]:
        return list(self._route)

    def runs(self) -> List[Run]:
        """Runs finalized so far (or by the last stop)."""
        if self._state == TrackingState.STOPPED:
            return list(self._completed_runs)
        return list(self.aggregator.runs)

    # =========================================================================
    # Transitions
    # =========================================================================

    def start(self, sink: Optional[StatsSink] = None) -> bool:
        """
        Begin tracking.

        Args:
            sink: Called with a LiveStats snapshot after every sample

        After the source failed mid-session, start() subscribes again
        and continues the same route instead of starting over.

        Returns:
            True (also when already tracking)

        Raises:
            PermissionDenied: Source reports no authorization
            SampleSourceFailure: Subscribing to the source failed
        """
        if self.is_tracking():
            if self._source_lost:
                return self._resubscribe(sink)
            logger.warning("Tracking already started")
            return True

        self._check_authorized()

        self._route = []
        self._completed_runs = []
        self.aggregator.reset()
        self._last_snapshot = LiveStats()
        self._start_ms = self.clock()
        self._sink = sink
        self._state = TrackingState.TRACKING

        try:
            self._subscribe()
        except SampleSourceFailure:
            self._state = TrackingState.IDLE
            self._sink = None
            raise

        logger.info(f"Tracking started at {self._start_ms}")
        return True

    def ingest(self, sample: LocationSample) -> Optional[LiveStats]:
        """
        Accept one sample from the source.

        Samples are dropped (not buffered) unless TRACKING.

        Returns:
            The new snapshot, or None if the sample was dropped
        """
        if self._state != TrackingState.TRACKING:
            logger.debug(f"Sample dropped in state {self._state.value}")
            return None

        self._route.append(sample)
        self.aggregator.add(sample)

        snapshot = self.aggregator.snapshot(self._route, self.clock(), self._start_ms)
        self._last_snapshot = snapshot

        if self._sink is not None:
            self._sink(snapshot)
        return snapshot

    def pause(self) -> None:
        if self._state == TrackingState.TRACKING:
            self._state = TrackingState.PAUSED
            logger.info("Tracking paused")

    def resume(self) -> None:
        if self._state == TrackingState.PAUSED:
            self._state = TrackingState.TRACKING
            logger.info("Tracking resumed")

    def stop(self) -> StopResult:
        """
        End tracking and build the session record.

        Any open run is finalized first, so it counts toward
        `number_of_runs` of the returned session.

        Raises:
            SessionTooShort: Fewer than `min_session_samples` samples,
                or nothing is being tracked (state is left untouched)
        """
        if not self.is_tracking():
            raise SessionTooShort(f"Nothing to stop in state {self._state.value}")

        self._unsubscribe()
        self._source_lost = False
        self.aggregator.finish()

        route = list(self._route)
        runs = list(self.aggregator.runs)
        stats = self.aggregator.snapshot(route, self.clock(), self._start_ms)

        self._route = []
        self._completed_runs = runs
        self._sink = None
        self.aggregator.reset()
        self._state = TrackingState.STOPPED

        if len(route) < self.min_session_samples:
            logger.info(f"Session too short: {len(route)} samples")
            raise SessionTooShort(
                f"Route has {len(route)} samples, need at least {self.min_session_samples}"
            )

        session = SnowboardSession.from_stats(
            stats,
            route=route,
            runs=runs,
            date=datetime.fromtimestamp(self._start_ms / 1000, tz=timezone.utc),
        )
        logger.info(
            f"Tracking stopped: {len(route)} samples, {session.distance_m:.0f} m, "
            f"{session.number_of_runs} runs"
        )
        return StopResult(route=route, session=session)

    # =========================================================================
    # Source plumbing
    # =========================================================================

    def _check_authorized(self) -> None:
        if self.source is not None and not self.source.is_authorized():
            logger.error("Location permission not granted")
            raise PermissionDenied("Location permission not granted")

    def _subscribe(self) -> None:
        if self.source is None:
            return
        try:
            self._subscription = self.source.subscribe(self.ingest, self._handle_source_error)
        except Exception as e:
            logger.error(f"Error starting location tracking: {e}")
            raise SampleSourceFailure(f"Failed to subscribe to location source: {e}") from e

    def _resubscribe(self, sink: Optional[StatsSink]) -> bool:
        """Reattach to the source after a stream failure, keeping the route."""
        self._check_authorized()
        self._subscribe()

        self._source_lost = False
        if sink is not None:
            self._sink = sink
        self._state = TrackingState.TRACKING
        logger.info(f"Location source reattached ({len(self._route)} samples kept)")
        return True

    def _unsubscribe(self) -> None:
        if self._subscription is not None:
            self._subscription.remove()
            self._subscription = None

    def _handle_source_error(self, error: BaseException) -> None:
        """
        Stream terminated by the source. No automatic reconnect.

        The session is parked in PAUSED; the caller either calls start()
        to reattach or stop() to finish with the samples collected so far.
        """
        logger.error(f"Location source failed: {error}")
        self._unsubscribe()
        self._source_lost = True
        self._state = TrackingState.PAUSED
        raise SampleSourceFailure(f"Location source failed: {error}") from error
