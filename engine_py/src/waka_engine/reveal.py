"""
Reveal phase: randomized presentation order with skip-on-absence.
"""

import logging
import random
from typing import Any, List, Optional

from .constants import (
    MSG_ANNOUNCE_START, MSG_SHOW_STEP, MSG_START_REVEAL_PHASE,
    MSG_UPDATE_REVEAL_STATUS, MSG_YOUR_REVEAL_TURN,
)
from .effects import Broadcast, Effects, Unicast
from .models import HistoryEntry, SessionState
from .roster import Roster
from .shuffle import shuffle_order

logger = logging.getLogger(__name__)


class RevealCoordinator:
    def __init__(self, roster: Roster, state: SessionState, rng: Optional[random.Random] = None):
        self.roster = roster
        self.state = state
        self.rng = rng
        self.finished = False

    def begin(self) -> Effects:
        """Fix a fresh presentation order and call the first live presenter."""
        self.state.reveal_order = shuffle_order(self.state.player_order, rng=self.rng)
        self.state.reveal_cursor = 0
        self.finished = False
        logger.info(f"Reveal order: {[self._name(pid) for pid in self.state.reveal_order]}")
        return [Broadcast(MSG_START_REVEAL_PHASE)] + self._land()

    def reset(self):
        self.finished = False

    def mark_ready(self, player_id: str, composition: Any) -> Effects:
        # Readiness is not tied to whose turn it is.
        player = self.roster.get(player_id)
        if player is None:
            return []
        player.final_composition = composition
        logger.info(f"{player.name} is ready to present")
        return [Broadcast(MSG_ANNOUNCE_START, {'name': player.name})]

    def reveal_step(self, payload: Any) -> Effects:
        return [Broadcast(MSG_SHOW_STEP, payload)]

    def advance_turn(self) -> Effects:
        self.state.reveal_cursor += 1
        return self._land()

    def current_presenter(self) -> Optional[str]:
        order = self.state.reveal_order
        if self.state.reveal_cursor < len(order):
            return order[self.state.reveal_cursor]
        return None

    def results(self) -> List[HistoryEntry]:
        """Compositions in reveal order; players gone or never ready are left out."""
        entries = []
        for pid in self.state.reveal_order:
            player = self.roster.get(pid)
            if player is None or player.final_composition is None:
                continue
            entries.append(HistoryEntry(name=player.name, composition=player.final_composition))
        return entries

    def _land(self) -> Effects:
        order = self.state.reveal_order
        while self.state.reveal_cursor < len(order):
            pid = order[self.state.reveal_cursor]
            player = self.roster.get(pid)
            if player is not None:
                logger.info(f"{player.name} is presenting ({self.state.reveal_cursor + 1}/{len(order)})")
                return [
                    Broadcast(MSG_UPDATE_REVEAL_STATUS, {'current_name': player.name}),
                    Unicast(pid, MSG_YOUR_REVEAL_TURN, {'hand': list(player.hand)}),
                ]
            logger.info(f"Skipping reveal slot {self.state.reveal_cursor}: player {pid} has left")
            self.state.reveal_cursor += 1
        self.finished = True
        return []

    def _name(self, player_id: str) -> str:
        player = self.roster.get(player_id)
        return player.name if player else player_id
