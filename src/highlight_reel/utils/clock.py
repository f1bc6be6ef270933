"""Game clock parsing and clutch window classification."""

from __future__ import annotations

import re
from typing import Any

# Live data clocks look like "PT05M30.00S"; only the minutes matter here.
_RE_ISO_MINUTES = re.compile(r"PT(\d+)M")

FINAL_REGULATION_PERIOD = 4
CLUTCH_MINUTES_THRESHOLD = 5


def parse_clock_minutes(clock: Any) -> int:
    """Return whole minutes remaining from a "PT{m}M{s}.{f}S" clock string.

    Anything that does not carry a minutes component yields 0, which counts
    as "no time left".
    """
    if not isinstance(clock, str):
        return 0

    m = _RE_ISO_MINUTES.search(clock)
    if not m:
        return 0
    return int(m.group(1))


def is_clutch(
    period: int,
    minutes_remaining: int,
    final_period: int = FINAL_REGULATION_PERIOD,
    threshold_minutes: int = CLUTCH_MINUTES_THRESHOLD,
) -> bool:
    """Decide whether an action at (period, minutes_remaining) is clutch time.

    Any overtime period is clutch. In the final regulation period the last
    ``threshold_minutes`` count, boundary included.
    """
    if period > final_period:
        return True
    if period == final_period and minutes_remaining <= threshold_minutes:
        return True
    return False
