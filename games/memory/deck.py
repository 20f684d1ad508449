"""
Cards and deck construction for the Memory game.

A deck of P pairs holds card ids 0..2P-1. Cards ``2k`` and ``2k + 1``
form pair ``k`` and show SYMBOLS[k].
"""

import random
from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from games.memory.symbols import MAX_PAIRS, Symbol, symbol_for_pair

DEFAULT_NUM_PAIRS = 6


@dataclass(frozen=True)
class Card:
    """One card on the table. Immutable; updates produce a new Card."""

    id: int
    is_flipped: bool = False
    is_matched: bool = False

    @property
    def pair_key(self) -> int:
        return self.id // 2

    @property
    def symbol(self) -> Symbol:
        return symbol_for_pair(self.pair_key)

    @property
    def face_up(self) -> bool:
        """Matched cards stay face-up even though nothing is pending."""
        return self.is_flipped or self.is_matched

    @property
    def is_pending(self) -> bool:
        """Flipped during the current guess and not yet resolved."""
        return self.is_flipped and not self.is_matched


Deck = Tuple[Card, ...]


def create_deck(
    num_pairs: int = DEFAULT_NUM_PAIRS,
    rng: Optional[random.Random] = None,
) -> Deck:
    """
    Build a freshly shuffled deck.

    The shuffle is ``random.Random.shuffle`` (Fisher-Yates), so every
    ordering is equally likely for a given RNG.

    Args:
        num_pairs: Number of distinct symbol pairs (1..MAX_PAIRS)
        rng: Random source; a new unseeded Random when omitted

    Returns:
        Tuple of 2 * num_pairs face-down, unmatched cards

    Raises:
        ValueError: If num_pairs is out of range
    """
    if not 1 <= num_pairs <= MAX_PAIRS:
        raise ValueError(
            f"num_pairs must be between 1 and {MAX_PAIRS}, got {num_pairs}"
        )
    rng = rng or random.Random()

    cards = []
    for k in range(num_pairs):
        cards.append(Card(id=2 * k))
        cards.append(Card(id=2 * k + 1))

    rng.shuffle(cards)
    return tuple(cards)


def validate_deck(cards: Iterable[Card], num_pairs: int) -> None:
    """
    Check that ``cards`` is a complete deck of ``num_pairs`` pairs.

    Ids must be exactly 0..2*num_pairs-1, each once, so every pair key
    occurs twice. A matched card must have its partner matched too.

    Raises:
        ValueError: Describing the first violation found
    """
    cards = list(cards)
    ids = sorted(c.id for c in cards)
    if ids != list(range(2 * num_pairs)):
        raise ValueError(
            f"Deck ids {ids} do not form {num_pairs} complete pairs"
        )

    matched_keys = [c.pair_key for c in cards if c.is_matched]
    for key in set(matched_keys):
        if matched_keys.count(key) != 2:
            raise ValueError(f"Pair {key} is only half matched")


def pending_cards(cards: Iterable[Card]) -> Tuple[Card, ...]:
    """Cards flipped in the current guess, in deck order."""
    return tuple(c for c in cards if c.is_pending)


def matched_pair_count(cards: Iterable[Card]) -> int:
    return sum(1 for c in cards if c.is_matched) // 2
