"""Tolerant readers for loosely typed upstream JSON fields.

The video feed sends ids as ints or strings depending on the day, and the
CDN feeds use "" for missing values.
"""

from __future__ import annotations

from typing import Any, Optional

_MISSING = frozenset({"", "-", "--", "N/A", "null", "None"})


def to_int_or_none(value: Any) -> Optional[int]:
    """Integer value of ``value``, or None when it is missing or not numeric.

    Booleans are not numbers here; ``"12.0"`` reads as 12.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text in _MISSING:
        return None
    try:
        return int(float(text))
    except (ValueError, OverflowError):
        return None


def to_str_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return None if text in _MISSING else text
