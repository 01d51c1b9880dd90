"""
Paused time bookkeeping.

TrackingSession reports wall-clock duration since start. The caller owns
pause accounting: it records pause/resume times here and applies the
accumulated offset to the session before persisting it.
"""

from typing import Optional

from .schemas import SnowboardSession


class PauseClock:
    """Accumulates paused wall-clock time in milliseconds."""

    def __init__(self):
        self.paused_ms = 0
        self._paused_at: Optional[int] = None

    @property
    def is_paused(self) -> bool:
        return self._paused_at is not None

    def pause(self, now_ms: int) -> None:
        if self._paused_at is None:
            self._paused_at = now_ms

    def resume(self, now_ms: int) -> None:
        if self._paused_at is not None:
            self.paused_ms += max(0, now_ms - self._paused_at)
            self._paused_at = None

    def paused_ms_at(self, now_ms: int) -> int:
        """Paused time including a pause that is still open."""
        if self._paused_at is None:
            return self.paused_ms
        return self.paused_ms + max(0, now_ms - self._paused_at)

    def apply(self, session: SnowboardSession, now_ms: Optional[int] = None) -> SnowboardSession:
        """
        Return a copy of the session with paused time removed.

        Args:
            session: Session from TrackingSession.stop()
            now_ms: Stop time; needed only if a pause is still open
        """
        paused = self.paused_ms if now_ms is None else self.paused_ms_at(now_ms)
        return session.with_paused_time(paused)

    def reset(self) -> None:
        self.paused_ms = 0
        self._paused_at = None
