"""
Feature modules for Snowtrack.

Each feature is a self-contained module with:
- schemas.py - Pydantic schemas
- models.py - SQLAlchemy models (optional)
- repository.py - Data access (optional)

Features:
- tracking: live stats engine (samples -> LiveStats, runs, session)
- sessions: storage of completed sessions
"""
