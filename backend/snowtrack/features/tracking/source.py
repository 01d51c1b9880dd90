"""
Location sources.

The platform location service lives outside this package. It is
represented by LocationSource: a one-shot authorization query and a
subscription that pushes samples one at a time.

ReplaySource feeds a recorded route through the same contract.
"""

import logging
from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional

from .schemas import LocationSample

logger = logging.getLogger(__name__)


SampleCallback = Callable[[LocationSample], object]
ErrorCallback = Callable[[BaseException], object]


# =============================================================================
# Exceptions
# =============================================================================

class TrackingError(Exception):
    """Base tracking error."""
    pass


class PermissionDenied(TrackingError):
    """Location access not authorized."""
    pass


class SampleSourceFailure(TrackingError):
    """Subscription to the location source failed or terminated."""
    pass


# =============================================================================
# Source contract
# =============================================================================

class Subscription:
    """Handle returned by LocationSource.subscribe()."""

    def __init__(self, on_remove: Optional[Callable[[], None]] = None):
        self._on_remove = on_remove
        self.active = True

    def remove(self) -> None:
        """Stop delivering samples. Safe to call twice."""
        if not self.active:
            return
        self.active = False
        if self._on_remove is not None:
            self._on_remove()


class LocationSource(ABC):
    """
    Abstract producer of location samples.

    Implementations deliver samples serially; each callback runs to
    completion before the next sample is delivered.
    """

    @abstractmethod
    def is_authorized(self) -> bool:
        """One-shot authorization query (granted/denied)."""
        pass

    @abstractmethod
    def subscribe(
        self,
        on_sample: SampleCallback,
        on_error: Optional[ErrorCallback] = None,
    ) -> Subscription:
        """
        Start delivering samples.

        Raises:
            Exception: Underlying platform failure
        """
        pass


class ReplaySource(LocationSource):
    """Replays a recorded list of samples to a single subscriber."""

    def __init__(self, samples: Iterable[LocationSample], authorized: bool = True):
        self.samples: List[LocationSample] = list(samples)
        self.authorized = authorized
        self._on_sample: Optional[SampleCallback] = None
        self._on_error: Optional[ErrorCallback] = None

    def is_authorized(self) -> bool:
        return self.authorized

    def subscribe(
        self,
        on_sample: SampleCallback,
        on_error: Optional[ErrorCallback] = None,
    ) -> Subscription:
        self._on_sample = on_sample
        self._on_error = on_error
        return Subscription(on_remove=self._clear)

    @property
    def has_subscriber(self) -> bool:
        return self._on_sample is not None

    def play(self, count: Optional[int] = None) -> int:
        """
        Push samples to the subscriber.

        Args:
            count: Number of samples to push (all remaining if None)

        Returns:
            Number of samples delivered
        """
        delivered = 0
        while self.samples and self._on_sample is not None:
            if count is not None and delivered >= count:
                break
            self._on_sample(self.samples.pop(0))
            delivered += 1
        return delivered

    def fail(self, error: BaseException) -> None:
        """Terminate the stream with an error."""
        if self._on_error is None:
            raise error
        self._on_error(error)

    def _clear(self) -> None:
        self._on_sample = None
        self._on_error = None
