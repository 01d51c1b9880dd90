"""
Stored session model.

One row per completed tracking session. Route samples and runs are
stored as JSON so a session can be replayed or re-analyzed later.
"""

from sqlalchemy import Column, String, DateTime, Integer, Float, JSON

from snowtrack.db.base import Base


class StoredSession(Base):
    """Completed snowboard session."""

    __tablename__ = "snowboard_sessions"

    id = Column(String(36), primary_key=True)
    date = Column(DateTime, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="completed")

    # Pinned stats
    duration_s = Column(Integer, nullable=False, default=0)
    distance_m = Column(Float, nullable=False, default=0.0)
    current_speed_mps = Column(Float, nullable=False, default=0.0)
    average_speed_mps = Column(Float, nullable=False, default=0.0)
    max_speed_mps = Column(Float, nullable=False, default=0.0)
    elevation_gain_m = Column(Float, nullable=False, default=0.0)
    elevation_loss_m = Column(Float, nullable=False, default=0.0)
    number_of_runs = Column(Integer, nullable=False, default=0)
    current_altitude_m = Column(Float, nullable=False, default=0.0)
    max_altitude_m = Column(Float, nullable=False, default=0.0)
    min_altitude_m = Column(Float, nullable=False, default=0.0)

    # Raw data
    route = Column(JSON, nullable=False, default=list)
    runs = Column(JSON, nullable=False, default=list)

    def __repr__(self):
        return f"<StoredSession {self.id} ({self.distance_m:.0f} m)>"
