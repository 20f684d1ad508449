"""Phase enum and the snapshot record shared by the engine and persistence."""

from dataclasses import dataclass
from enum import Enum

from games.memory.deck import Deck


class Phase(Enum):
    """Lifecycle of one Memory game."""

    READY = "ready"
    PLAYING = "playing"
    COMPLETE = "complete"


@dataclass(frozen=True)
class GameSnapshot:
    """Everything needed to resume a game after a reload."""

    phase: Phase
    match_count: int
    is_resolving: bool
    cards: Deck
