"""
Game registry for the Arena platform.

Manages registration and lookup of game implementations and their
configuration models.
"""

from typing import Callable, Dict, Type
from importlib import import_module

from core.game import Game


# Registry of available games.
# Each entry maps game_type to component paths (resolved lazily at runtime).
GAME_REGISTRY: Dict[str, Dict[str, str]] = {
    "memory": {
        "game_class": "games.memory.game.MemoryGame",
        "game_factory": "games.memory.create_game",
        "config_class": "games.memory.config.MemoryGameConfig",
    },
}


def _import_attr(path: str):
    """
    Import a class or callable from its fully qualified path.

    Args:
        path: Dot-separated path like "module.submodule.ClassName"

    Raises:
        ImportError: If module or attribute cannot be found
    """
    parts = path.rsplit(".", 1)
    if len(parts) != 2:
        raise ImportError(f"Invalid import path: {path}")

    module_path, name = parts
    module = import_module(module_path)
    return getattr(module, name)


def _entry(game_type: str, component: str) -> str:
    if game_type not in GAME_REGISTRY:
        raise ValueError(
            f"Unknown game type: {game_type}. "
            f"Available: {list(GAME_REGISTRY.keys())}"
        )

    path = GAME_REGISTRY[game_type].get(component)
    if not path:
        raise ValueError(f"No {component} defined for: {game_type}")
    return path


def get_game_class(game_type: str) -> Type[Game]:
    """
    Get the Game class for a game type.

    Raises:
        ValueError: If game_type is not registered
    """
    return _import_attr(_entry(game_type, "game_class"))


def get_game_factory(game_type: str) -> Callable:
    """
    Get the factory function for creating a game instance.

    The factory accepts a SessionConfig plus host collaborators
    (scheduler, store, on_complete) and returns a Game instance.

    Raises:
        ValueError: If game_type is not registered or has no factory
    """
    return _import_attr(_entry(game_type, "game_factory"))


def get_game_config_class(game_type: str) -> Type:
    """Get the game-specific config class (Pydantic model) for a game type."""
    return _import_attr(_entry(game_type, "config_class"))


def list_games() -> list:
    """List all registered game types."""
    return list(GAME_REGISTRY.keys())


def is_game_registered(game_type: str) -> bool:
    """Check if a game type is registered."""
    return game_type in GAME_REGISTRY
