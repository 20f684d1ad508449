"""
Memory Arena - host layer for single-session games.

This package wires games implementing the core.Game interface to a
player: configuration, game registry, terminal rendering and the CLI.

Components:
- registry: Game type registration
- config: Session configuration
- display: Rich terminal rendering of a game's public state
- cli: Command-line entry point
"""

from arena.registry import (
    GAME_REGISTRY,
    get_game_class,
    get_game_factory,
    get_game_config_class,
)
from arena.config import SessionConfig, load_config, create_config

__all__ = [
    "GAME_REGISTRY",
    "get_game_class",
    "get_game_factory",
    "get_game_config_class",
    "SessionConfig",
    "load_config",
    "create_config",
]
