"""Merge highlight batches into one chronological list."""

from typing import Dict, Iterable, List

from ..models.events import Event


def merge_events(*batches: Iterable[Event]) -> List[Event]:
    """Deduplicate by event id and sort ascending.

    Batches are consumed in the order given and the first copy of an id
    wins, so pass the authoritative batch first. Event ids are assigned in
    game order, so sorting on them is chronological.
    """
    unique: Dict[int, Event] = {}
    for batch in batches:
        for event in batch:
            if event.event_id not in unique:
                unique[event.event_id] = event
    return sorted(unique.values(), key=lambda e: e.event_id)


def filter_to_ids(events: Iterable[Event], event_ids: Iterable[int]) -> List[Event]:
    """Keep only events whose id is in ``event_ids``, preserving order."""
    wanted = event_ids if isinstance(event_ids, (set, frozenset)) else set(event_ids)
    return [event for event in events if event.event_id in wanted]
