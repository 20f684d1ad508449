"""
Pair symbols for the Memory game.

Each pair of cards shows one symbol. A symbol is a display-only reference
(an icon name and a colour token); the engine identifies pairs by their
pair key, which is also the symbol's index in SYMBOLS.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Symbol:
    """Icon and colour shown on the face of a card."""

    index: int
    icon: str
    color: str

    def to_dict(self) -> dict:
        return {"index": self.index, "icon": self.icon, "color": self.color}


SYMBOLS: Tuple[Symbol, ...] = (
    Symbol(0, "heart", "text-rose-500"),
    Symbol(1, "star", "text-amber-500"),
    Symbol(2, "sun", "text-yellow-500"),
    Symbol(3, "moon", "text-purple-500"),
    Symbol(4, "cloud", "text-sky-500"),
    Symbol(5, "flower", "text-emerald-500"),
)

MAX_PAIRS = len(SYMBOLS)


def symbol_for_pair(pair_key: int) -> Symbol:
    """
    Look up the symbol for a pair key.

    Raises:
        ValueError: If no symbol exists for ``pair_key``
    """
    if not 0 <= pair_key < MAX_PAIRS:
        raise ValueError(
            f"No symbol for pair key {pair_key} (have {MAX_PAIRS} symbols)"
        )
    return SYMBOLS[pair_key]
