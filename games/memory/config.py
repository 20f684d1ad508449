"""Memory game configuration."""

from pydantic import BaseModel, Field

from games.memory.deck import DEFAULT_NUM_PAIRS
from games.memory.symbols import MAX_PAIRS


class MemoryGameConfig(BaseModel):
    """Configuration for Memory game parameters."""

    num_pairs: int = Field(
        default=DEFAULT_NUM_PAIRS,
        ge=1,
        le=MAX_PAIRS,
        description="Number of symbol pairs on the table (deck holds twice as many cards)",
    )
    resolve_delay_ms: int = Field(
        default=800,
        ge=0,
        le=10_000,
        description="How long both cards of a guess stay visible before resolution",
    )
    points_per_match: int = Field(
        default=100,
        ge=1,
        description="Score awarded per matched pair",
    )
    storage_prefix: str = Field(
        default="memory",
        min_length=1,
        description="Prefix for the session storage keys",
    )

    @property
    def resolve_delay(self) -> float:
        """Resolution delay in seconds."""
        return self.resolve_delay_ms / 1000.0

    class Config:
        extra = "forbid"
