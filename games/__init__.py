"""
Game implementations for the Arena platform.

Each game is a self-contained submodule under games/<game_type>/ providing:
- game.py: Core game logic implementing core.Game
- config.py: Game-specific configuration (Pydantic model)
- create_game(): Factory function for instantiation from a SessionConfig

To add a new game, create a games/<name>/ directory with these components
and register it in arena/registry.py.
"""
