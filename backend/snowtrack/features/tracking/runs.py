"""
Downhill Run Detector

Segments a live sample stream into discrete downhill runs.

Hysteresis on consecutive altitude deltas:
- FLAT -> IN_RUN when a step drops at least `start_drop_m`
- IN_RUN -> FLAT when a step climbs more than `exit_climb_m`, or when
  more than `idle_samples` samples pass without another downhill step

A candidate run is recorded only if its vertical drop exceeds
`min_vertical_drop_m`; otherwise it is discarded silently.
"""

import logging
from typing import List, Optional, Sequence, Tuple

from snowtrack.shared.constants import (
    DetectorState,
    RUN_START_DROP_M,
    RUN_EXIT_CLIMB_M,
    RUN_IDLE_SAMPLES,
    RUN_MIN_VERTICAL_DROP_M,
    RUN_MIN_STREAM_SAMPLES,
)
from snowtrack.shared.geo import path_length
from .schemas import LocationSample, Run

logger = logging.getLogger(__name__)


class RunDetector:
    """
    Incremental downhill run detector.

    Feed samples one by one with `add()`. Nothing is evaluated until the
    stream holds RUN_MIN_STREAM_SAMPLES samples; at that point all pending
    steps are evaluated in order, then each new step as it arrives.
    """

    def __init__(
        self,
        start_drop_m: Optional[float] = None,
        exit_climb_m: Optional[float] = None,
        idle_samples: Optional[int] = None,
        min_vertical_drop_m: Optional[float] = None,
    ):
        """
        Args:
            start_drop_m: Step drop (m) that starts a run
            exit_climb_m: Step climb (m) that ends a run
            idle_samples: Samples without downhill step before a run ends
            min_vertical_drop_m: Drop (m) a run must exceed to be recorded
        """
        self.start_drop_m = start_drop_m if start_drop_m is not None else RUN_START_DROP_M
        self.exit_climb_m = exit_climb_m if exit_climb_m is not None else RUN_EXIT_CLIMB_M
        self.idle_samples = idle_samples if idle_samples is not None else RUN_IDLE_SAMPLES
        self.min_vertical_drop_m = (
            min_vertical_drop_m if min_vertical_drop_m is not None else RUN_MIN_VERTICAL_DROP_M
        )
        self.reset()

    @classmethod
    def from_settings(cls, settings) -> "RunDetector":
        """Create detector from application settings."""
        return cls(
            start_drop_m=settings.run_start_drop_m,
            exit_climb_m=settings.run_exit_climb_m,
            idle_samples=settings.run_idle_samples,
            min_vertical_drop_m=settings.run_min_vertical_drop_m,
        )

    def reset(self) -> None:
        """Forget all samples and runs."""
        self._samples: List[LocationSample] = []
        self._runs: List[Run] = []
        self._state = DetectorState.FLAT
        self._start_index = 0
        self._last_trigger_index = 0
        # Index of the next sample whose step (i-1, i) is still unevaluated
        self._next_index = 1
        # Samples fed since reset; `_samples` only keeps the tail still needed
        self._seen = 0
        # Stream position of `_samples[0]`
        self._offset = 0

    # =========================================================================
    # Public API
    # =========================================================================

    @property
    def state(self) -> DetectorState:
        return self._state

    @property
    def runs(self) -> Tuple[Run, ...]:
        """Finalized runs in order."""
        return tuple(self._runs)

    @property
    def run_count(self) -> int:
        return len(self._runs)

    def add(self, sample: LocationSample) -> Optional[Run]:
        """
        Feed the next sample.

        Returns:
            Run finalized by this sample, if any
        """
        self._samples.append(sample)
        self._seen += 1
        if self._seen < RUN_MIN_STREAM_SAMPLES:
            return None

        finalized = None
        while self._next_index < len(self._samples):
            run = self._evaluate_step(self._next_index)
            if run is not None:
                finalized = run
            self._next_index += 1

        self._trim()
        return finalized

    def finish(self) -> Optional[Run]:
        """
        Close an open run at the end of the stream.

        The end point is the last sample with a known altitude.
        """
        if self._state != DetectorState.IN_RUN:
            return None

        end_index = len(self._samples) - 1
        while end_index > self._start_index and self._samples[end_index].altitude is None:
            end_index -= 1

        return self._finalize(end_index)

    # =========================================================================
    # State machine
    # =========================================================================

    def _evaluate_step(self, i: int) -> Optional[Run]:
        prev_alt = self._samples[i - 1].altitude
        curr_alt = self._samples[i].altitude
        if prev_alt is None or curr_alt is None:
            return None

        delta = curr_alt - prev_alt

        if self._state == DetectorState.FLAT:
            if delta <= -self.start_drop_m:
                self._state = DetectorState.IN_RUN
                self._start_index = i - 1
                self._last_trigger_index = i
                logger.debug(
                    f"Run candidate started at sample {self._offset + i - 1} (alt {prev_alt:.1f} m)"
                )
            return None

        # IN_RUN
        if delta > self.exit_climb_m:
            # The climb itself is not part of the run
            return self._finalize(i - 1)

        if delta <= -self.start_drop_m:
            self._last_trigger_index = i
            return None

        if i - self._last_trigger_index > self.idle_samples:
            return self._finalize(i)

        return None

    def _trim(self) -> None:
        """
        Drop samples no future step or run can reach.

        FLAT needs only the last sample (the next step starts there);
        IN_RUN needs everything from the run's first sample.
        """
        if self._state == DetectorState.FLAT:
            drop = len(self._samples) - 1
        else:
            drop = self._start_index
        if drop <= 0:
            return

        del self._samples[:drop]
        self._offset += drop
        self._next_index -= drop
        self._start_index = max(0, self._start_index - drop)
        self._last_trigger_index = max(0, self._last_trigger_index - drop)

    def _finalize(self, end_index: int) -> Optional[Run]:
        """Record the candidate span if it dropped enough, then go FLAT."""
        span = self._samples[self._start_index:end_index + 1]
        self._state = DetectorState.FLAT

        run = self._build_run(span)
        if run is None:
            return None

        self._runs.append(run)
        logger.info(
            f"Run #{len(self._runs)} recorded: drop {run.vertical_drop_m:.1f} m, "
            f"distance {run.distance_m:.0f} m"
        )
        return run

    def _build_run(self, span: Sequence[LocationSample]) -> Optional[Run]:
        start, end = span[0], span[-1]
        if start.altitude is None or end.altitude is None:
            return None

        vertical_drop = start.altitude - end.altitude
        if vertical_drop <= self.min_vertical_drop_m:
            logger.debug(f"Run candidate discarded: drop {vertical_drop:.1f} m")
            return None

        speeds = [s.speed for s in span if s.speed is not None and s.speed > 0]

        return Run(
            start_timestamp_ms=start.timestamp_ms,
            end_timestamp_ms=end.timestamp_ms,
            start_altitude_m=start.altitude,
            end_altitude_m=end.altitude,
            vertical_drop_m=vertical_drop,
            max_speed_mps=max(speeds) if speeds else 0.0,
            average_speed_mps=sum(speeds) / len(speeds) if speeds else 0.0,
            distance_m=path_length(span),
            sample_count=len(span),
        )
