"""
Session persistence for the Memory game.

The engine mirrors its state into a session store after every mutation and
reads it back once at start-up, so a host restart resumes mid-game. State
is spread over four string entries:

    <prefix>_game_state    "ready" | "playing" | "complete"
    <prefix>_matches       decimal match count
    <prefix>_is_checking   "true" | "false"
    <prefix>_cards         JSON list of {"id", "isFlipped", "isMatched"}

Symbols are never stored; they are re-derived from card ids on load.

Failures never escape this module: an unreadable snapshot loads as None,
and a store that cannot be written is logged and skipped. Passing
``store=None`` models an environment without session storage, in which
case every operation is a no-op.
"""

import json
import logging
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, TypeAdapter

from core.session_store import SessionStore
from games.memory.deck import (
    DEFAULT_NUM_PAIRS,
    Card,
    matched_pair_count,
    pending_cards,
    validate_deck,
)
from games.memory.state import GameSnapshot, Phase

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_PREFIX = "memory"

KEY_SUFFIXES = {
    "cards": "cards",
    "matches": "matches",
    "is_checking": "is_checking",
    "game_state": "game_state",
}


class CardRecord(BaseModel):
    """Persisted form of a Card."""

    id: int = Field(..., ge=0)
    is_flipped: bool = Field(..., alias="isFlipped")
    is_matched: bool = Field(..., alias="isMatched")

    class Config:
        populate_by_name = True
        extra = "ignore"  # older snapshots also carried iconIndex/color

    @classmethod
    def from_card(cls, card: Card) -> "CardRecord":
        return cls(id=card.id, is_flipped=card.is_flipped, is_matched=card.is_matched)

    def to_card(self) -> Card:
        return Card(id=self.id, is_flipped=self.is_flipped, is_matched=self.is_matched)


_card_list = TypeAdapter(List[CardRecord])


def encode_cards(cards) -> str:
    records = [CardRecord.from_card(c).model_dump(by_alias=True) for c in cards]
    return json.dumps(records)


def decode_cards(raw: str) -> List[Card]:
    """
    Raises:
        ValueError: If ``raw`` is not a JSON list of card records
    """
    return [record.to_card() for record in _card_list.validate_json(raw)]


def _parse_bool(raw: str) -> bool:
    if raw == "true":
        return True
    if raw == "false":
        return False
    raise ValueError(f"Expected 'true' or 'false', got {raw!r}")


class SessionPersistence:
    """Saves, loads and clears Memory game snapshots in a session store."""

    def __init__(
        self,
        store: Optional[SessionStore],
        prefix: str = DEFAULT_STORAGE_PREFIX,
        num_pairs: int = DEFAULT_NUM_PAIRS,
    ):
        self._store = store
        self.prefix = prefix
        self.num_pairs = num_pairs

    @property
    def available(self) -> bool:
        return self._store is not None

    @property
    def keys(self) -> Dict[str, str]:
        """Logical name -> store key for every entry this adapter owns."""
        return {name: f"{self.prefix}_{suffix}" for name, suffix in KEY_SUFFIXES.items()}

    def save(self, snapshot: GameSnapshot) -> None:
        if self._store is None:
            return
        keys = self.keys
        try:
            self._store.set_item(keys["game_state"], snapshot.phase.value)
            self._store.set_item(keys["matches"], str(snapshot.match_count))
            self._store.set_item(keys["cards"], encode_cards(snapshot.cards))
            self._store.set_item(
                keys["is_checking"], "true" if snapshot.is_resolving else "false"
            )
        except OSError as e:
            logger.warning("Could not save memory game to session storage: %s", e)

    def load(self) -> Optional[GameSnapshot]:
        """
        Read the last saved snapshot.

        Returns:
            GameSnapshot, or None if nothing is stored, storage is
            unavailable, or any entry fails to parse or validate
        """
        if self._store is None:
            return None

        keys = self.keys
        try:
            raw = {name: self._store.get_item(key) for name, key in keys.items()}
        except OSError as e:
            logger.warning("Could not read memory game from session storage: %s", e)
            return None

        if all(value is None for value in raw.values()):
            return None
        missing = sorted(name for name, value in raw.items() if value is None)
        if missing:
            logger.warning("Discarding incomplete memory game snapshot (missing %s)", missing)
            return None

        try:
            return self._parse(raw)
        except ValueError as e:
            logger.warning("Discarding unreadable memory game snapshot: %s", e)
            return None

    def _parse(self, raw: Dict[str, str]) -> GameSnapshot:
        phase = Phase(raw["game_state"])
        match_count = int(raw["matches"])
        is_resolving = _parse_bool(raw["is_checking"])
        cards = decode_cards(raw["cards"])

        validate_deck(cards, self.num_pairs)
        if not 0 <= match_count <= self.num_pairs:
            raise ValueError(
                f"Match count {match_count} outside 0..{self.num_pairs}"
            )
        if matched_pair_count(cards) != match_count:
            raise ValueError(
                f"Match count {match_count} disagrees with "
                f"{matched_pair_count(cards)} matched pairs on the table"
            )
        if phase is Phase.COMPLETE and match_count != self.num_pairs:
            raise ValueError("Snapshot is complete but pairs remain unmatched")
        if phase is not Phase.COMPLETE and match_count == self.num_pairs:
            raise ValueError(
                f"Snapshot is {phase.value} but every pair is matched"
            )
        if phase is Phase.READY and any(c.face_up for c in cards):
            raise ValueError("Snapshot is ready but cards are face-up")
        if len(pending_cards(cards)) > 2:
            raise ValueError("More than two cards are face-up and unresolved")

        return GameSnapshot(
            phase=phase,
            match_count=match_count,
            is_resolving=is_resolving,
            cards=tuple(cards),
        )

    def clear(self) -> None:
        if self._store is None:
            return
        try:
            for key in self.keys.values():
                self._store.remove_item(key)
        except OSError as e:
            logger.warning("Could not clear memory game session storage: %s", e)
