"""
Snowtrack entry points.

Wires settings into the tracking engine and configures logging.

Usage:
    from snowtrack.main import setup_logging, create_tracking_session

    setup_logging()
    session = create_tracking_session(source=platform_source)
"""

import logging
import sys
from typing import Callable, Optional

from snowtrack.config import Settings, settings as default_settings
from snowtrack.features.tracking import (
    LocationSource,
    StatsAggregator,
    TrackingSession,
)

logger = logging.getLogger(__name__)


# === Logging Setup ===
def setup_logging(config: Optional[Settings] = None) -> None:
    """Configure root logging to stdout at the configured level."""
    config = config or default_settings
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
        ]
    )


# === Engine Factory ===
def create_tracking_session(
    source: Optional[LocationSource] = None,
    config: Optional[Settings] = None,
    clock: Optional[Callable[[], int]] = None,
) -> TrackingSession:
    """
    Build a TrackingSession configured from settings.

    Args:
        source: Location source (None = caller pushes samples via ingest)
        config: Settings override (default: global settings)
        clock: Millisecond clock override

    Returns:
        Idle TrackingSession
    """
    config = config or default_settings
    aggregator = StatsAggregator.from_settings(config)

    kwargs = {}
    if clock is not None:
        kwargs["clock"] = clock

    session = TrackingSession(
        source=source,
        aggregator=aggregator,
        min_session_samples=config.min_session_samples,
        **kwargs,
    )
    logger.debug(
        f"Tracking session created (strategy={aggregator.strategy.value}, "
        f"min_drop={aggregator.detector.min_vertical_drop_m} m)"
    )
    return session
