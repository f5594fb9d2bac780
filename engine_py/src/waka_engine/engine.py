"""Session controller: lobby, draft, reveal and game over for the one shared session"""

import logging
import random
from typing import Any, List, Optional

from .constants import (
    MSG_ERROR, MSG_GAME_OVER, MSG_MOVE_TO_INPUT, MSG_RECEIVE_HISTORY, MSG_UPDATE_PLAYER_LIST,
    PHASE_DRAFTING, PHASE_GAME_OVER, PHASE_LOBBY, PHASE_REVEALING,
)
from .draft import DraftCoordinator
from .effects import Broadcast, CloseAll, Effects, Unicast
from .errors import GameError, NOT_ENOUGH_PLAYERS
from .history import HistoryLog
from .models import SessionState
from .reveal import RevealCoordinator
from .roster import Roster
from .rules import SessionConfig, default_config
from .serialization import serialize_entries, serialize_player
from .shuffle import shuffle_order

logger = logging.getLogger(__name__)


class WakaSession:
    """
    The single shared game session.

    Every public handler corresponds to one inbound transport event, runs to
    completion without I/O, and returns the effects the transport must deliver
    in order. Invalid or stale actions return an empty list.
    """

    def __init__(self, config: SessionConfig = default_config,
                 rng: Optional[random.Random] = None,
                 history: Optional[HistoryLog] = None):
        self.config = config
        self.rng = rng
        self.history = history if history is not None else HistoryLog(config.history_capacity)
        self.state = SessionState()
        self.roster = Roster(config)
        self.draft = DraftCoordinator(self.roster, self.state, config)
        self.reveal = RevealCoordinator(self.roster, self.state, rng)

    @property
    def phase(self) -> str:
        return self.state.phase

    # Lobby

    def join(self, player_id: str, name: str) -> Effects:
        if player_id in self.roster:
            logger.debug(f"Ignoring repeated join from {player_id}")
            return []
        try:
            self.roster.join(player_id, name, accepting=self.state.phase == PHASE_LOBBY)
        except GameError as e:
            logger.info(f"Join rejected for {name!r}: {e}")
            return [Unicast(player_id, MSG_ERROR, e.message)]
        return [self._player_list()]

    def request_history(self, player_id: str) -> Effects:
        return [Unicast(player_id, MSG_RECEIVE_HISTORY, serialize_entries(self.history.fetch()))]

    def start_game(self, player_id: str) -> Effects:
        if self.state.phase != PHASE_LOBBY:
            logger.debug(f"Ignoring start from {player_id} during {self.state.phase}")
            return []
        count = len(self.roster)
        if not self.config.can_start_with(count):
            logger.info(f"[{NOT_ENOUGH_PLAYERS}] start requested with {count} players")
            return [Broadcast(MSG_ERROR, f"At least {self.config.min_players} players are required.")]

        self.state.player_order = shuffle_order(self.roster.ids(), rng=self.rng)
        self.state.phase = PHASE_DRAFTING
        self.draft.begin()
        logger.info(f"Game started with {count} players, draft order: "
                    f"{[self.roster.get(pid).name for pid in self.state.player_order]}")
        return [Broadcast(MSG_MOVE_TO_INPUT)]

    # Drafting

    def submit_pack(self, player_id: str, cards: List[Any]) -> Effects:
        if self.state.phase != PHASE_DRAFTING:
            return []
        effects = self.draft.submit_pack(player_id, cards)
        return effects + self._after_draft_step()

    def pick_card(self, player_id: str, index: int) -> Effects:
        if self.state.phase != PHASE_DRAFTING:
            return []
        effects = self.draft.pick_card(player_id, index)
        return effects + self._after_draft_step()

    def _after_draft_step(self) -> Effects:
        if not self.draft.complete:
            return []
        self.state.phase = PHASE_REVEALING
        logger.info("Entering reveal phase")
        return self.reveal.begin() + self._after_reveal_step()

    # Revealing

    def ready_to_present(self, player_id: str, composition: Any) -> Effects:
        if self.state.phase != PHASE_REVEALING:
            return []
        return self.reveal.mark_ready(player_id, composition)

    def reveal_step(self, player_id: str, payload: Any) -> Effects:
        if self.state.phase != PHASE_REVEALING:
            return []
        return self.reveal.reveal_step(payload)

    def finish_turn(self, player_id: str) -> Effects:
        if self.state.phase != PHASE_REVEALING:
            return []
        return self.reveal.advance_turn() + self._after_reveal_step()

    def _after_reveal_step(self) -> Effects:
        if not self.reveal.finished:
            return []
        return self._game_over()

    def _game_over(self) -> Effects:
        self.state.phase = PHASE_GAME_OVER
        results = self.reveal.results()
        self.history.record(results)
        logger.info(f"Game over, {len(results)} compositions presented")
        effects = [Broadcast(MSG_GAME_OVER, serialize_entries(results)), CloseAll()]
        self.reset()
        return effects

    # Membership

    def disconnect(self, player_id: str) -> Effects:
        effects: Effects = []
        if not self.roster.leave(player_id):
            return effects
        if self.state.phase == PHASE_LOBBY:
            effects.append(self._player_list())
        if len(self.roster) == 0:
            self.reset()
        return effects

    def reset(self):
        """Return to an empty-handed Lobby; the history log is kept."""
        self.state.phase = PHASE_LOBBY
        self.state.player_order = []
        self.state.reveal_order = []
        self.state.reveal_cursor = 0
        self.draft.reset()
        self.reveal.reset()
        self.roster.clear_game_state()
        logger.info("=== Session reset ===")

    def _player_list(self) -> Broadcast:
        return Broadcast(MSG_UPDATE_PLAYER_LIST, self.roster.names())

    def snapshot(self) -> dict:
        return {
            'phase': self.state.phase,
            'players': [serialize_player(p) for p in self.roster.all()],
            'player_order': list(self.state.player_order),
            'reveal_order': list(self.state.reveal_order),
            'reveal_cursor': self.state.reveal_cursor,
            'presenter': self.reveal.current_presenter(),
        }
