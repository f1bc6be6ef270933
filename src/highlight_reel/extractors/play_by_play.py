"""Extract the clutch window from a live-data play-by-play log."""

from typing import Any, Dict, Iterable

from ..models.clutch import ClutchContext
from ..utils.clock import (
    CLUTCH_MINUTES_THRESHOLD,
    FINAL_REGULATION_PERIOD,
    is_clutch,
    parse_clock_minutes,
)
from ..utils.coerce import to_int_or_none


def extract_actions(payload: Any) -> list:
    """Return ``game.actions`` from a playbyplay_{gameId}.json body."""
    if not isinstance(payload, dict):
        return []
    game = payload.get("game")
    if not isinstance(game, dict):
        return []
    actions = game.get("actions")
    return actions if isinstance(actions, list) else []


def extract_clutch_context(
    actions: Iterable[Dict[str, Any]],
    tracked_player_id: int,
    final_period: int = FINAL_REGULATION_PERIOD,
    threshold_minutes: int = CLUTCH_MINUTES_THRESHOLD,
) -> ClutchContext:
    """Collect clutch action numbers and the players involved in them.

    The tracked player is left out of the participants because their whole
    game is fetched anyway.
    """
    event_ids = set()
    participants: Dict[int, None] = {}

    for action in actions:
        if not isinstance(action, dict):
            continue

        period = to_int_or_none(action.get("period"))
        if period is None:
            continue
        minutes = parse_clock_minutes(action.get("clock"))
        if not is_clutch(period, minutes, final_period, threshold_minutes):
            continue

        action_number = to_int_or_none(action.get("actionNumber"))
        if action_number:
            event_ids.add(action_number)

        person_id = to_int_or_none(action.get("personId"))
        if person_id and person_id != tracked_player_id:
            participants.setdefault(person_id, None)

    return ClutchContext(
        clutch_event_ids=frozenset(event_ids),
        participant_ids=tuple(participants),
    )
