"""
Live Stats Aggregator

Combines distance, elevation and run detection into one LiveStats
snapshot per ingested sample.
"""

import logging
from typing import Optional, Sequence, Tuple

from snowtrack.shared.constants import AggregationStrategy
from snowtrack.shared.elevation import ElevationAccumulator
from snowtrack.shared.geo import distance, path_length
from .runs import RunDetector
from .schemas import LiveStats, LocationSample, Run

logger = logging.getLogger(__name__)


class StatsAggregator:
    """
    Aggregates a growing route into LiveStats.

    The aggregator does not read a clock: callers pass `now_ms` and
    `start_ms` to `snapshot()`.

    Strategies:
    - RECOMPUTE: distance and elevation are recalculated over the full
      route for each snapshot (O(n) per sample)
    - INCREMENTAL: running sums updated in `add()`
    """

    def __init__(
        self,
        strategy: AggregationStrategy = AggregationStrategy.RECOMPUTE,
        detector: Optional[RunDetector] = None,
    ):
        self.strategy = AggregationStrategy(strategy)
        self.detector = detector or RunDetector()
        self.reset()

    @classmethod
    def from_settings(cls, settings) -> "StatsAggregator":
        """Create aggregator (and its run detector) from settings."""
        return cls(
            strategy=settings.aggregation_strategy,
            detector=RunDetector.from_settings(settings),
        )

    def reset(self) -> None:
        """Clear all session state, including detected runs."""
        self.detector.reset()
        self._elevation = ElevationAccumulator()
        self._distance_m = 0.0
        self._max_speed_mps = 0.0
        self._last: Optional[LocationSample] = None

    @property
    def runs(self) -> Tuple[Run, ...]:
        return self.detector.runs

    @property
    def max_speed_mps(self) -> float:
        return self._max_speed_mps

    def add(self, sample: LocationSample) -> Optional[Run]:
        """
        Advance incremental state with the next sample.

        Returns:
            Run finalized by this sample, if any
        """
        if self._last is not None:
            self._distance_m += distance(self._last, sample)
        self._last = sample

        if sample.speed is not None and sample.speed > self._max_speed_mps:
            self._max_speed_mps = sample.speed

        self._elevation.add(sample)
        return self.detector.add(sample)

    def finish(self) -> Optional[Run]:
        """Force-close an open run (session stop)."""
        return self.detector.finish()

    def snapshot(
        self,
        route: Sequence[LocationSample],
        now_ms: int,
        start_ms: int,
    ) -> LiveStats:
        """
        Build the LiveStats for the route so far.

        Args:
            route: Every sample added so far, in order
            now_ms: Current wall-clock time (ms)
            start_ms: Session start time (ms)

        Returns:
            New LiveStats snapshot (all zeros for an empty route)
        """
        if not route:
            return LiveStats()

        if self.strategy == AggregationStrategy.RECOMPUTE:
            total_distance = path_length(route)
            elevation = ElevationAccumulator.from_samples(route)
        else:
            total_distance = self._distance_m
            elevation = self._elevation

        duration = max(0, (now_ms - start_ms) // 1000)
        average_speed = total_distance / duration if duration > 0 else 0.0
        last = route[-1]

        return LiveStats(
            distance_m=total_distance,
            duration_s=duration,
            current_speed_mps=last.speed or 0.0,
            average_speed_mps=average_speed,
            max_speed_mps=self._max_speed_mps,
            elevation_gain_m=elevation.gain_m,
            elevation_loss_m=elevation.loss_m,
            number_of_runs=self.detector.run_count,
            current_altitude_m=elevation.current_altitude_m,
            max_altitude_m=elevation.max_altitude_m,
            min_altitude_m=elevation.min_altitude_m,
        )
