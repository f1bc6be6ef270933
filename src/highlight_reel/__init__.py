"""NBA highlight reel.

Collects a tracked player's video highlights for a game, adds the clutch-time
plays of everyone involved in them, and returns one deduplicated,
chronological list.
"""

from .config import AppSettings, TrackingConfig, get_settings
from .models import Category, ClutchContext, Event, Game

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "AppSettings",
    "TrackingConfig",
    "get_settings",
    "Category",
    "ClutchContext",
    "Event",
    "Game",
]
