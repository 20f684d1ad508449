"""Core Memory game engine.

Phase state-machine
-------------------
READY     ->  start()                      ->  PLAYING
PLAYING   ->  flip(i) on a face-down card
              +-- one card pending           ->  wait for the second flip
              +-- two cards pending          ->  is_resolving, schedule resolution
              resolution fires (after delay)
              +-- match    ->  both matched, match_count++
              |               +-- match_count == total_pairs  ->  COMPLETE
              +-- mismatch ->  both face-down again
              is_resolving cleared
COMPLETE  ->  complete() reports the score; start() begins a new game

start() is accepted in every phase and discards the current deck. Each deck
has a generation number, and resolutions from an older generation are
ignored when they fire.
"""

import logging
import random
from dataclasses import replace
from typing import Any, Callable, Dict, List, Optional, Tuple

from core.game import Game
from core.scheduler import ManualScheduler, Scheduler
from core.session_store import SessionStore
from games.memory.deck import (
    DEFAULT_NUM_PAIRS,
    Card,
    Deck,
    create_deck,
    pending_cards,
    validate_deck,
)
from games.memory.persistence import DEFAULT_STORAGE_PREFIX, SessionPersistence
from games.memory.resolution import (
    DEFAULT_RESOLVE_DELAY,
    Resolution,
    ResolutionScheduler,
)
from games.memory.state import GameSnapshot, Phase

logger = logging.getLogger(__name__)

DEFAULT_POINTS_PER_MATCH = 100


class MemoryGameError(Exception):
    """Base class for Memory engine errors."""


class GameNotCompleteError(MemoryGameError):
    """Raised when a score is requested before every pair is matched."""


class MemoryGame(Game):
    """
    Single-player Memory engine.

    Design invariants:
    - The engine is the only mutator of the deck, phase and counters.
    - Invalid input (out-of-range index, face-up card, flip while a guess
      is resolving, flip outside PLAYING) is ignored, never raised.
    - At most one resolution is pending; both cards of a guess change in
      a single commit.
    - State is written to session persistence after every mutation.
    """

    def __init__(
        self,
        num_pairs: int = DEFAULT_NUM_PAIRS,
        seed: Optional[int] = None,
        scheduler: Optional[Scheduler] = None,
        store: Optional[SessionStore] = None,
        on_complete: Optional[Callable[[int], None]] = None,
        resolve_delay: float = DEFAULT_RESOLVE_DELAY,
        points_per_match: int = DEFAULT_POINTS_PER_MATCH,
        storage_prefix: str = DEFAULT_STORAGE_PREFIX,
        deck_factory: Optional[Callable[[], Deck]] = None,
    ):
        """
        Args:
            num_pairs:        Number of symbol pairs in a deck.
            seed:             Seed for reproducible shuffles. ``None`` uses an
                              unseeded RNG.
            scheduler:        Runs the delayed resolution. Defaults to a
                              ManualScheduler the host must advance.
            store:            Session store for reload-resume. ``None``
                              disables persistence.
            on_complete:      Called with the final score by complete().
            resolve_delay:    Seconds both cards stay visible before resolution.
            points_per_match: Score per matched pair.
            storage_prefix:   Prefix for the session storage keys.
            deck_factory:     Overrides deck creation (e.g. a fixed layout).
        """
        self._num_pairs = num_pairs
        self._seed = seed
        self._points_per_match = points_per_match
        self._on_complete = on_complete
        self._deck_factory = deck_factory
        self.scheduler = scheduler if scheduler is not None else ManualScheduler()
        self._resolver = ResolutionScheduler(self.scheduler, resolve_delay)
        self._persistence = SessionPersistence(
            store, prefix=storage_prefix, num_pairs=num_pairs
        )
        self._generation = 0
        self._rng = random.Random(seed)
        self._enter_ready()

    # ------------------------------------------------------------------
    # identity / read-only view
    # ------------------------------------------------------------------

    @property
    def game_type(self) -> str:
        return "memory"

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def cards(self) -> Deck:
        return self._cards

    @property
    def match_count(self) -> int:
        return self._match_count

    @property
    def total_pairs(self) -> int:
        return self._num_pairs

    @property
    def is_resolving(self) -> bool:
        return self._is_resolving

    @property
    def resolve_delay(self) -> float:
        return self._resolver.delay

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def persistence(self) -> SessionPersistence:
        return self._persistence

    def snapshot(self) -> GameSnapshot:
        return GameSnapshot(
            phase=self._phase,
            match_count=self._match_count,
            is_resolving=self._is_resolving,
            cards=self._cards,
        )

    # ------------------------------------------------------------------
    # lifecycle
    # ------------------------------------------------------------------

    def reset(self, seed: Optional[int] = None) -> None:
        """Return to READY with a fresh deck and drop any saved snapshot."""
        if seed is not None:
            self._seed = seed
        self._rng = random.Random(self._seed)
        self._enter_ready()
        self._persistence.clear()

    def start(self) -> None:
        """Begin a new game, superseding whatever was in progress."""
        self._supersede()
        self._phase = Phase.PLAYING
        self._cards = self._new_deck()
        self._match_count = 0
        self._is_resolving = False
        self._persistence.clear()
        self._save()
        logger.info(
            "Started memory game (generation %d, %d pairs)",
            self._generation, self._num_pairs,
        )

    def flip(self, index: int) -> bool:
        """
        Turn the card at ``index`` face-up.

        Returns:
            True if the flip was applied, False if it was ignored
        """
        if self._phase is not Phase.PLAYING or self._is_resolving:
            logger.debug("Ignoring flip(%r): input blocked", index)
            return False
        if isinstance(index, bool) or not isinstance(index, int):
            return False
        if not 0 <= index < len(self._cards):
            logger.debug("Ignoring flip(%r): out of range", index)
            return False

        card = self._cards[index]
        if card.is_matched or card.is_flipped:
            logger.debug("Ignoring flip(%d): card %d already face-up", index, card.id)
            return False

        cards = list(self._cards)
        cards[index] = replace(card, is_flipped=True)
        self._cards = tuple(cards)
        logger.debug("Flipped index %d (card %d)", index, card.id)

        pending = pending_cards(self._cards)
        if len(pending) == 2:
            self._is_resolving = True
        self._save()

        if self._is_resolving:
            self._schedule_resolution(pending[0], pending[1])
        return True

    def complete(self) -> int:
        """
        Report the final score of a finished game.

        Clears the saved snapshot and passes the score to the completion
        callback.

        Raises:
            GameNotCompleteError: If the game is not in the COMPLETE phase
        """
        if self._phase is not Phase.COMPLETE:
            raise GameNotCompleteError(
                f"Game is {self._phase.value}; "
                f"{self._match_count}/{self._num_pairs} pairs matched"
            )
        score = self._match_count * self._points_per_match
        self._persistence.clear()
        logger.info("Memory game complete: score %d", score)
        if self._on_complete is not None:
            self._on_complete(score)
        return score

    def restore(self, snapshot: GameSnapshot) -> None:
        """
        Replace the in-memory state with ``snapshot``.

        A snapshot taken while a guess was resolving has lost its timer, so
        the resolution is scheduled again with the full delay.

        Raises:
            ValueError: If the snapshot deck does not fit this game's size
        """
        if len(snapshot.cards) != 2 * self._num_pairs:
            raise ValueError(
                f"Snapshot has {len(snapshot.cards)} cards, "
                f"expected {2 * self._num_pairs}"
            )
        self._supersede()
        self._phase = snapshot.phase
        self._match_count = snapshot.match_count
        self._cards = tuple(snapshot.cards)

        pending = pending_cards(self._cards)
        resolving = self._phase is Phase.PLAYING and len(pending) == 2
        if snapshot.is_resolving and not resolving:
            logger.warning("Snapshot was resolving without a flipped pair; clearing flag")
        self._is_resolving = resolving
        self._save()

        if resolving:
            self._schedule_resolution(pending[0], pending[1])

    def resume(self) -> bool:
        """
        Restore the saved snapshot, if any.

        Returns:
            True if a snapshot was found and applied
        """
        snapshot = self._persistence.load()
        if snapshot is None:
            return False
        self.restore(snapshot)
        logger.info(
            "Resumed memory game: %s, %d/%d pairs matched",
            self._phase.value, self._match_count, self._num_pairs,
        )
        return True

    # ------------------------------------------------------------------
    # internals
    # ------------------------------------------------------------------

    def _enter_ready(self) -> None:
        self._supersede()
        self._phase = Phase.READY
        self._cards = self._new_deck()
        self._match_count = 0
        self._is_resolving = False

    def _new_deck(self) -> Deck:
        if self._deck_factory is not None:
            deck = tuple(self._deck_factory())
            validate_deck(deck, self._num_pairs)
            return deck
        return create_deck(self._num_pairs, self._rng)

    def _supersede(self) -> None:
        """Invalidate any in-flight resolution."""
        self._generation += 1
        self._resolver.cancel()

    def _save(self) -> None:
        self._persistence.save(self.snapshot())

    def _schedule_resolution(self, card_a: Card, card_b: Card) -> None:
        self._resolver.schedule(
            self._generation, self._cards, card_a, card_b, self._commit
        )

    def _commit(self, resolution: Resolution) -> None:
        if resolution.generation != self._generation:
            logger.debug(
                "Dropping stale resolution (generation %d, current %d)",
                resolution.generation, self._generation,
            )
            return

        self._cards = resolution.deck
        if resolution.is_match:
            self._match_count += 1
            if self._match_count == self._num_pairs:
                self._phase = Phase.COMPLETE
        self._is_resolving = False
        self._save()

    # ------------------------------------------------------------------
    # Game interface
    # ------------------------------------------------------------------

    def _card_view(self, index: int, card: Card, reveal: bool) -> Dict[str, Any]:
        view: Dict[str, Any] = {
            "index": index,
            "id": card.id,
            "is_flipped": card.is_flipped,
            "is_matched": card.is_matched,
        }
        if reveal or card.face_up:
            view["pair_key"] = card.pair_key
            view["symbol"] = card.symbol.to_dict()
        return view

    def get_public_state(self) -> Dict[str, Any]:
        return {
            "phase": self._phase.value,
            "cards": [
                self._card_view(i, c, reveal=False) for i, c in enumerate(self._cards)
            ],
            "match_count": self._match_count,
            "total_pairs": self._num_pairs,
            "is_resolving": self._is_resolving,
        }

    def get_state(self) -> Dict[str, Any]:
        return {
            "public": self.get_public_state(),
            "hidden": {
                "cards": [
                    self._card_view(i, c, reveal=True) for i, c in enumerate(self._cards)
                ],
            },
            "metadata": {
                "game_type": self.game_type,
                "generation": self._generation,
                "seed": self._seed,
                "resolution_pending": self._resolver.pending,
            },
        }

    def get_available_actions(self) -> List[Dict[str, Any]]:
        actions: List[Dict[str, Any]] = []
        if self._phase is Phase.PLAYING and not self._is_resolving:
            actions.extend(
                {"action_type": "FLIP", "index": i}
                for i, c in enumerate(self._cards)
                if not c.face_up
            )
        if self._phase is Phase.COMPLETE:
            actions.append({"action_type": "COMPLETE"})
        actions.append({"action_type": "START"})
        return actions

    def step(self, action: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
        action_type = action.get("action_type")

        if action_type == "START":
            self.start()
            result: Dict[str, Any] = {"started": True, "generation": self._generation}
        elif action_type == "FLIP":
            index = action.get("index")
            applied = self.flip(index)
            result = {
                "index": index,
                "applied": applied,
                "is_resolving": self._is_resolving,
            }
        elif action_type == "COMPLETE":
            result = {"score": self.complete()}
        else:
            raise ValueError(f"Unknown action type: {action_type}")

        return result, self.is_over()

    def is_over(self) -> bool:
        return self._phase is Phase.COMPLETE

    def get_scores(self) -> Dict[str, Any]:
        return {
            "matches": self._match_count,
            "total_pairs": self._num_pairs,
            "score": self._match_count * self._points_per_match,
        }
