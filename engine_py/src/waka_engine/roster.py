"""Connected players and their per-game state"""

import logging
from typing import Dict, List, Optional

from .errors import ROOM_FULL, SESSION_IN_PROGRESS, raise_error
from .models import Player
from .rules import SessionConfig

logger = logging.getLogger(__name__)


class Roster:
    def __init__(self, config: SessionConfig):
        self.config = config
        self.players: Dict[str, Player] = {}

    def join(self, player_id: str, name: str, accepting: bool) -> Player:
        """
        Register a connection as a player.

        Raises:
            GameError: SESSION_IN_PROGRESS when the lobby is closed,
                ROOM_FULL when max_players is reached
        """
        if not accepting:
            raise_error(SESSION_IN_PROGRESS, "A game is currently in progress.")
        if len(self.players) >= self.config.max_players:
            raise_error(ROOM_FULL, "The room is full.")
        player = Player(id=player_id, name=name)
        self.players[player_id] = player
        logger.info(f"Player {name} ({player_id}) joined ({len(self.players)}/{self.config.max_players})")
        return player

    def leave(self, player_id: str) -> Optional[Player]:
        player = self.players.pop(player_id, None)
        if player:
            logger.info(f"Player {player.name} ({player_id}) left")
        return player

    def get(self, player_id: str) -> Optional[Player]:
        return self.players.get(player_id)

    def all(self) -> List[Player]:
        return list(self.players.values())

    def names(self) -> List[str]:
        return [p.name for p in self.players.values()]

    def ids(self) -> List[str]:
        return list(self.players.keys())

    def __contains__(self, player_id: str) -> bool:
        return player_id in self.players

    def __len__(self) -> int:
        return len(self.players)

    def clear_game_state(self):
        for player in self.players.values():
            player.clear_game_state()
