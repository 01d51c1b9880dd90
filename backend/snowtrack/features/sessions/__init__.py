"""
Completed session storage.

Usage:
    from snowtrack.features.sessions import SessionRepository

Components:
- StoredSession: SQLAlchemy model for completed sessions
- SessionRepository: save / get / list / delete by session id
"""

from .models import StoredSession
from .repository import SessionRepository

__all__ = [
    "StoredSession",
    "SessionRepository",
]
