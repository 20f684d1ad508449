"""
Abstract Game interface for the Memory Arena platform.

All games must implement this interface so the host layer (CLI, registry)
can drive them without knowing their rules.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, List, Optional, Tuple


class Game(ABC):
    """
    Abstract base class for single-session, single-player games.

    This interface defines the contract a game engine exposes to its host.
    The host renders public state and forwards player input as structured
    action dicts; the engine owns every state transition.

    Key concepts:
    - **Phase**: Coarse lifecycle of one game (e.g. "ready", "playing")
    - **State**: Split into a public view (safe to render) and the full
      state (including hidden information, used for serialization)
    - **Actions**: Structured dicts with an ``action_type`` field and
      game-specific arguments

    Example implementation:
        class MyGame(Game):
            def reset(self, seed=None):
                self.board = initialize_board(seed)

            def get_available_actions(self):
                return [{"action_type": "START"}]
    """

    @property
    @abstractmethod
    def game_type(self) -> str:
        """
        Return the game type identifier.

        Returns:
            String identifier for this game type (e.g., "memory")
        """
        pass

    @abstractmethod
    def reset(self, seed: Optional[int] = None) -> None:
        """
        Reset the game to its initial, not-yet-started state.

        Args:
            seed: Optional random seed for reproducible game setup
        """
        pass

    @abstractmethod
    def get_state(self) -> Dict[str, Any]:
        """
        Get the complete current game state.

        Returns:
            Dict containing:
                - public: Public game state
                - hidden: Information the player must not see yet
                - metadata: Phase, generation counters, etc.
        """
        pass

    @abstractmethod
    def get_public_state(self) -> Dict[str, Any]:
        """
        Get the state a presentation layer is allowed to render.

        Returns:
            Dict with game-specific public state fields
        """
        pass

    @abstractmethod
    def get_available_actions(self) -> List[Dict[str, Any]]:
        """
        Get all actions the player can currently take.

        Returns:
            List of valid action dicts, each containing:
                - action_type: String identifying the action type
                - Additional fields specific to the action type
        """
        pass

    @abstractmethod
    def step(self, action: Dict[str, Any]) -> Tuple[Dict[str, Any], bool]:
        """
        Execute an action and advance the game state.

        Args:
            action: Action dict matching format from get_available_actions()

        Returns:
            Tuple of (result_dict, game_over)

        Raises:
            ValueError: If the action type is unknown
        """
        pass

    @abstractmethod
    def is_over(self) -> bool:
        """
        Check if the game has reached its terminal phase.
        """
        pass

    @abstractmethod
    def get_scores(self) -> Dict[str, Any]:
        """
        Get current or final scores.

        Returns:
            Dict of score fields. Format is game-specific.
        """
        pass
