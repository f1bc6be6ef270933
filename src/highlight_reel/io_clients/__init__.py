"""Async clients for the NBA upstream feeds."""

from .cdn import NBACdnClient
from .nba_stats import ANY_TEAM, NBAStatsClient

__all__ = [
    "ANY_TEAM",
    "NBACdnClient",
    "NBAStatsClient",
]
