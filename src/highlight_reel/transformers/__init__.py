"""Transformations applied to decoded highlight events."""

from .events import filter_to_ids, merge_events

__all__ = [
    "filter_to_ids",
    "merge_events",
]
