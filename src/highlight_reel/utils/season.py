"""Season labels as the stats endpoints expect them ("2025-26")."""

from __future__ import annotations

import re
from datetime import date

SEASON_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")

# Regular season tips off in October
SEASON_START_MONTH = 10


def season_for_date(day: date) -> str:
    """Season a calendar day belongs to; the offseason counts as the season just played."""
    start = day.year if day.month >= SEASON_START_MONTH else day.year - 1
    return f"{start}-{(start + 1) % 100:02d}"


def current_season(today: date | None = None) -> str:
    return season_for_date(today or date.today())


def is_season_label(value: object) -> bool:
    """True for "YYYY-YY" where YY is the year after YYYY."""
    if not isinstance(value, str):
        return False
    match = SEASON_PATTERN.match(value.strip())
    if not match:
        return False
    start, end = int(match.group(1)), int(match.group(2))
    return (start + 1) % 100 == end
