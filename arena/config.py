"""Configuration models for an Arena play session."""

from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, field_validator

from arena.registry import GAME_REGISTRY, get_game_config_class


class SessionConfig(BaseModel):
    """
    Main configuration for one play session.

    ``game_config`` is passed through to the game's own config model,
    which validates it.
    """

    game_type: str = Field(
        default="memory",
        description="Type of game to play (e.g., 'memory')"
    )
    game_config: Optional[Dict[str, Any]] = Field(
        default=None,
        description="Game-specific configuration"
    )

    # Storage
    session_file: Optional[str] = Field(
        default=None,
        description="JSON file used as session storage; None keeps the session in memory"
    )

    # Execution
    seed: Optional[int] = Field(
        default=None,
        description="Random seed for reproducibility"
    )
    verbose: bool = Field(
        default=False,
        description="Enable verbose logging"
    )

    @field_validator("game_type")
    @classmethod
    def validate_game_type(cls, v: str) -> str:
        """Validate that game_type is registered."""
        if v not in GAME_REGISTRY:
            available = list(GAME_REGISTRY.keys())
            raise ValueError(
                f"Unknown game type: {v}. Available: {available}"
            )
        return v

    def get_game_config(self):
        """Validate ``game_config`` against the game's config model."""
        config_class = get_game_config_class(self.game_type)
        return config_class(**(self.game_config or {}))

    class Config:
        extra = "forbid"


def load_config(filepath: str) -> SessionConfig:
    """
    Load configuration from YAML or JSON file.

    Args:
        filepath: Path to config file

    Returns:
        SessionConfig instance
    """
    import json
    from pathlib import Path

    path = Path(filepath)
    content = path.read_text()

    if path.suffix in ['.yaml', '.yml']:
        import yaml
        data = yaml.safe_load(content) or {}
    else:
        data = json.loads(content)

    return SessionConfig(**data)


def create_config(game_type: str = "memory", **kwargs) -> SessionConfig:
    """
    Create a SessionConfig from simple parameters.

    Args:
        game_type: Type of game
        **kwargs: Additional SessionConfig fields
    """
    return SessionConfig(game_type=game_type, **kwargs)
