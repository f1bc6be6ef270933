"""Clock, season and value coercion helpers."""

from .clock import is_clutch, parse_clock_minutes
from .coerce import to_int_or_none, to_str_or_none
from .season import current_season, is_season_label, season_for_date

__all__ = [
    "is_clutch",
    "parse_clock_minutes",
    "to_int_or_none",
    "to_str_or_none",
    "current_season",
    "is_season_label",
    "season_for_date",
]
