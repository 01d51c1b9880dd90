"""
Elevation processing utilities.

This is the SINGLE SOURCE OF TRUTH for elevation calculations.
"""
from typing import Iterable, List, Optional, Protocol, Tuple


class HasAltitude(Protocol):
    altitude: Optional[float]


def calculate_elevation_changes(
    elevations: List[Optional[float]]
) -> Tuple[float, float]:
    """
    Calculate total elevation gain and loss.

    Only consecutive pairs where both values are known contribute.
    A missing value breaks the chain, it is not bridged.

    Args:
        elevations: Elevation values in route order (None = no vertical fix)

    Returns:
        Tuple of (gain_m, loss_m)
    """
    gain = 0.0
    loss = 0.0

    for i in range(1, len(elevations)):
        prev = elevations[i - 1]
        curr = elevations[i]
        if prev is None or curr is None:
            continue

        diff = curr - prev
        if diff > 0:
            gain += diff
        else:
            loss += abs(diff)

    return gain, loss


class ElevationAccumulator:
    """
    Running elevation totals over a stream of samples.

    Tracks gain, loss and min/max/current altitude. Samples without
    altitude are skipped here but still belong to the route.
    """

    def __init__(self):
        self.gain_m = 0.0
        self.loss_m = 0.0
        self._current: Optional[float] = None
        self._max: Optional[float] = None
        self._min: Optional[float] = None
        # Altitude of the immediately preceding sample (None if it had none)
        self._previous: Optional[float] = None
        self._count = 0

    @classmethod
    def from_samples(cls, samples: Iterable[HasAltitude]) -> "ElevationAccumulator":
        """Build from scratch over a full route."""
        altitudes = [sample.altitude for sample in samples]
        known = [a for a in altitudes if a is not None]

        acc = cls()
        acc.gain_m, acc.loss_m = calculate_elevation_changes(altitudes)
        acc._count = len(altitudes)
        if altitudes:
            acc._previous = altitudes[-1]
        if known:
            acc._current = known[-1]
            acc._max = max(known)
            acc._min = min(known)
        return acc

    def add(self, sample: HasAltitude) -> None:
        altitude = sample.altitude
        self._count += 1

        if altitude is not None:
            if self._previous is not None:
                diff = altitude - self._previous
                if diff > 0:
                    self.gain_m += diff
                else:
                    self.loss_m += abs(diff)

            self._current = altitude
            if self._max is None or altitude > self._max:
                self._max = altitude
            if self._min is None or altitude < self._min:
                self._min = altitude

        self._previous = altitude

    @property
    def sample_count(self) -> int:
        return self._count

    @property
    def vertical_m(self) -> float:
        """Total elevation change (gain + loss, not net)."""
        return self.gain_m + self.loss_m

    @property
    def current_altitude_m(self) -> float:
        return self._current if self._current is not None else 0.0

    @property
    def max_altitude_m(self) -> float:
        return self._max if self._max is not None else 0.0

    @property
    def min_altitude_m(self) -> float:
        return self._min if self._min is not None else 0.0
