"""
Resolution of a two-card guess.

After the second card of a guess is flipped, the outcome is decided and
applied only after a fixed delay so the player can see both faces. The
decision itself is a pure function (``resolve``); ResolutionScheduler
wraps it in a deferred, cancellable task.

Each scheduled resolution carries the deck generation it was created for.
The engine bumps the generation on every restart and drops resolutions
whose generation is stale, so a timer from an abandoned deck can never
touch the new one.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Tuple

from core.scheduler import ScheduledTask, Scheduler
from games.memory.deck import Card, Deck

logger = logging.getLogger(__name__)

DEFAULT_RESOLVE_DELAY = 0.8  # seconds


class Outcome(Enum):
    MATCH = "match"
    MISMATCH = "mismatch"


@dataclass(frozen=True)
class Resolution:
    """Outcome of one guess, ready to be committed by the engine."""

    generation: int
    first_id: int
    second_id: int
    outcome: Outcome
    deck: Deck

    @property
    def is_match(self) -> bool:
        return self.outcome is Outcome.MATCH


def resolve(deck: Deck, card_a: Card, card_b: Card) -> Tuple[Outcome, Deck]:
    """
    Decide a guess and apply it to a copy of ``deck``.

    Match: both cards become matched and stay face-up.
    Mismatch: both cards are turned face-down again.
    Both cards change in the same returned deck; ``deck`` is not modified.

    Raises:
        ValueError: If the cards are the same card or not in the deck
    """
    if card_a.id == card_b.id:
        raise ValueError(f"Cannot resolve card {card_a.id} against itself")
    ids = {c.id for c in deck}
    for card in (card_a, card_b):
        if card.id not in ids:
            raise ValueError(f"Card {card.id} is not in the deck")

    if card_a.pair_key == card_b.pair_key:
        outcome = Outcome.MATCH
        changes = {"is_flipped": True, "is_matched": True}
    else:
        outcome = Outcome.MISMATCH
        changes = {"is_flipped": False}

    guessed = (card_a.id, card_b.id)
    updated = tuple(
        replace(c, **changes) if c.id in guessed else c
        for c in deck
    )
    return outcome, updated


class ResolutionScheduler:
    """Defers ``resolve`` by a fixed delay; at most one guess is pending."""

    def __init__(self, scheduler: Scheduler, delay: float = DEFAULT_RESOLVE_DELAY):
        if delay < 0:
            raise ValueError(f"delay must be >= 0, got {delay}")
        self._scheduler = scheduler
        self.delay = delay
        self._task: Optional[ScheduledTask] = None

    @property
    def pending(self) -> bool:
        return self._task is not None and self._task.pending

    def schedule(
        self,
        generation: int,
        deck: Deck,
        card_a: Card,
        card_b: Card,
        commit: Callable[[Resolution], None],
    ) -> ScheduledTask:
        """
        Resolve ``card_a`` against ``card_b`` after the delay.

        ``commit`` receives the Resolution exactly once, unless the task is
        cancelled first.

        Raises:
            RuntimeError: If another resolution is still pending
        """
        if self.pending:
            raise RuntimeError("A resolution is already pending")

        def fire() -> None:
            outcome, updated = resolve(deck, card_a, card_b)
            logger.debug(
                "Resolved cards %d/%d (generation %d): %s",
                card_a.id, card_b.id, generation, outcome.value,
            )
            commit(Resolution(
                generation=generation,
                first_id=card_a.id,
                second_id=card_b.id,
                outcome=outcome,
                deck=updated,
            ))

        self._task = self._scheduler.schedule(self.delay, fire)
        return self._task

    def cancel(self) -> None:
        """Drop the pending resolution, if any."""
        if self._task is not None:
            self._task.cancel()
            self._task = None
