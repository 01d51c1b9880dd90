"""
Snowtrack

Live statistics engine for snowboard sessions: GPS samples in,
distance/speed/elevation snapshots and downhill runs out.
"""

__version__ = "0.1.0"
