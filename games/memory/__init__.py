"""Memory game module for the Arena platform.

A single-player pairs game: flip two cards at a time, matched pairs stay
face-up, the game ends when every pair is found.

Components:
- symbols:      Static table of pair symbols (icon + colour)
- deck:         Card model and shuffled deck construction
- resolution:   Delayed match/mismatch decision for a two-card guess
- persistence:  Session-storage snapshots for reload-resume
- game:         Core game engine (MemoryGame)
- config:       Game configuration (Pydantic)
"""

from games.memory.config import MemoryGameConfig
from games.memory.deck import Card, create_deck
from games.memory.game import GameNotCompleteError, MemoryGame, MemoryGameError
from games.memory.persistence import SessionPersistence
from games.memory.resolution import Outcome, ResolutionScheduler, resolve
from games.memory.state import GameSnapshot, Phase
from games.memory.symbols import SYMBOLS, Symbol

__all__ = [
    "MemoryGame",
    "MemoryGameConfig",
    "MemoryGameError",
    "GameNotCompleteError",
    "Card",
    "create_deck",
    "Phase",
    "GameSnapshot",
    "Outcome",
    "resolve",
    "ResolutionScheduler",
    "SessionPersistence",
    "Symbol",
    "SYMBOLS",
    "create_game",
]

GAME_TYPE = "memory"


def create_game(session_config, scheduler=None, store=None, on_complete=None):
    """
    Factory: create a MemoryGame from a SessionConfig.

    Game parameters come from ``session_config.game_config`` and are
    validated by MemoryGameConfig. The scheduler, session store and
    completion callback are supplied by the host.
    """
    game_config = MemoryGameConfig(**(session_config.game_config or {}))
    return MemoryGame(
        num_pairs=game_config.num_pairs,
        seed=session_config.seed,
        scheduler=scheduler,
        store=store,
        on_complete=on_complete,
        resolve_delay=game_config.resolve_delay,
        points_per_match=game_config.points_per_match,
        storage_prefix=game_config.storage_prefix,
    )
