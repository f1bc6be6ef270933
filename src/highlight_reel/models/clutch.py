"""Clutch window context derived from the play-by-play log."""

from dataclasses import dataclass, field
from typing import FrozenSet, Tuple


@dataclass(frozen=True)
class ClutchContext:
    """Action numbers inside the clutch window and who took part in them.

    ``participant_ids`` keeps the order in which players first appear in
    clutch actions and never contains the tracked player.
    """

    clutch_event_ids: FrozenSet[int] = field(default_factory=frozenset)
    participant_ids: Tuple[int, ...] = ()

    @classmethod
    def empty(cls) -> "ClutchContext":
        return cls()

    def is_empty(self) -> bool:
        return not self.clutch_event_ids and not self.participant_ids
