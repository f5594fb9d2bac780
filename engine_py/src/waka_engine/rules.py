"""
Session configuration and validation.
"""

import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_HISTORY_CAPACITY, DEFAULT_MAX_PLAYERS, DEFAULT_MIN_PLAYERS


class SessionConfig(BaseModel):
    """Limits fixed for the lifetime of the process."""

    model_config = ConfigDict(frozen=True)

    min_players: int = Field(
        default=DEFAULT_MIN_PLAYERS,
        ge=1,
        description="Minimum number of players required to start"
    )
    max_players: int = Field(
        default=DEFAULT_MAX_PLAYERS,
        ge=1,
        description="Maximum number of players allowed in the lobby"
    )
    history_capacity: int = Field(
        default=DEFAULT_HISTORY_CAPACITY,
        ge=1,
        description="Number of finished compositions kept in memory"
    )
    pack_size: Optional[int] = Field(
        default=None,
        ge=1,
        description="Exact number of cards a submitted pack must hold (None = any size)"
    )

    @field_validator('max_players')
    @classmethod
    def validate_max_players(cls, v, info):
        """Validate maximum players doesn't fall below minimum."""
        min_players = info.data.get('min_players', DEFAULT_MIN_PLAYERS)
        if v < min_players:
            raise ValueError(f'max_players ({v}) must be >= min_players ({min_players})')
        return v

    def can_start_with(self, player_count: int) -> bool:
        return player_count >= self.min_players

    def accepts_pack(self, cards: list) -> bool:
        if not cards:
            return False
        return self.pack_size is None or len(cards) == self.pack_size


# Default configuration instance
default_config = SessionConfig()


def create_config(**overrides) -> SessionConfig:
    """Create a SessionConfig with optional overrides."""
    config_dict = default_config.model_dump()
    config_dict.update(overrides)
    return SessionConfig(**config_dict)


def config_from_env() -> SessionConfig:
    """Build the process configuration from WAKA_* environment variables."""
    overrides = {}
    for key in ('min_players', 'max_players', 'history_capacity', 'pack_size'):
        raw = os.getenv(f"WAKA_{key.upper()}")
        if raw:
            overrides[key] = int(raw)
    return create_config(**overrides)
