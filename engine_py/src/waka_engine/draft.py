"""
Pick-and-pass draft: pack submission barrier, pick barrier and pack rotation.
"""

import logging
from typing import Any, List, Set

from .constants import (
    DRAFT_AWAITING_PICKS, DRAFT_AWAITING_SUBMISSION, DRAFT_COMPLETE, DRAFT_IDLE,
    MSG_NEXT_DRAFT_TURN, MSG_UPDATE_SUBMIT_STATUS,
)
from .effects import Broadcast, Effects, Unicast
from .models import SessionState
from .roster import Roster
from .rules import SessionConfig

logger = logging.getLogger(__name__)


class DraftCoordinator:
    """
    Drives the rounds of one draft.

    ``state.player_order`` is the rotation cycle: after every round each
    player receives the pack last held by their predecessor in that order.
    """

    def __init__(self, roster: Roster, state: SessionState, config: SessionConfig):
        self.roster = roster
        self.state = state
        self.config = config
        self.stage = DRAFT_IDLE
        self.submitted: Set[str] = set()
        self.round = 0

    def begin(self):
        self.stage = DRAFT_AWAITING_SUBMISSION
        self.submitted = set()
        self.round = 0

    def reset(self):
        self.stage = DRAFT_IDLE
        self.submitted = set()
        self.round = 0

    @property
    def complete(self) -> bool:
        return self.stage == DRAFT_COMPLETE

    def submit_pack(self, player_id: str, cards: List[Any]) -> Effects:
        """Store a player's initial pack; release the first round once all are in."""
        if self.stage != DRAFT_AWAITING_SUBMISSION:
            logger.debug(f"Ignoring pack from {player_id}: draft is {self.stage}")
            return []
        player = self.roster.get(player_id)
        if player is None or player_id not in self.state.player_order:
            logger.debug(f"Ignoring pack from unknown player {player_id}")
            return []
        if player_id in self.submitted:
            logger.debug(f"Ignoring second pack from {player.name}")
            return []
        if not self.config.accepts_pack(cards):
            logger.debug(f"Ignoring unacceptable pack of {len(cards)} cards from {player.name}")
            return []

        player.pack = list(cards)
        self.submitted.add(player_id)

        current = self._count_submitted()
        total = len(self.state.player_order)
        logger.info(f"{player.name} submitted a pack ({current}/{total})")
        effects: Effects = [Broadcast(MSG_UPDATE_SUBMIT_STATUS, {'current': current, 'total': total})]

        if self._all_submitted():
            self.stage = DRAFT_AWAITING_PICKS
            effects.extend(self._rotate_and_deal())
        return effects

    def pick_card(self, player_id: str, index: int) -> Effects:
        """Move one card from the player's pack into their pending selection."""
        if self.stage != DRAFT_AWAITING_PICKS:
            return []
        player = self.roster.get(player_id)
        if player is None or player_id not in self.state.player_order:
            return []
        if player.has_selected:
            logger.debug(f"Ignoring second pick from {player.name}")
            return []
        if isinstance(index, bool) or not isinstance(index, int) or not 0 <= index < len(player.pack):
            logger.debug(f"Ignoring pick {index!r} from {player.name}, pack has {len(player.pack)}")
            return []

        player.selected = player.pack.pop(index)
        player.has_selected = True

        if not self._all_picked():
            return []
        return self._finish_round()

    def _finish_round(self) -> Effects:
        players = [self.roster.get(pid) for pid in self.state.player_order]
        for player in players:
            player.hand.append(player.selected)
            player.selected = None
            player.has_selected = False
        self.round += 1

        if not players[0].pack:
            self.stage = DRAFT_COMPLETE
            logger.info(f"Draft complete after {self.round} rounds")
            return []

        logger.info(f"Draft round {self.round} complete, passing packs")
        return self._rotate_and_deal()

    def _rotate_and_deal(self) -> Effects:
        self.rotate_packs()
        order = self.state.player_order
        effects: Effects = []
        for i, pid in enumerate(order):
            player = self.roster.get(pid)
            source = self.roster.get(order[i - 1])
            effects.append(Unicast(pid, MSG_NEXT_DRAFT_TURN, {
                'pack': list(player.pack),
                'hand': list(player.hand),
                'from_name': source.name,
            }))
        return effects

    def rotate_packs(self):
        """Pass every pack one seat along ``player_order``."""
        order = self.state.player_order
        if len(order) < 2:
            return
        packs = [self.roster.get(pid).pack for pid in order]
        for i, pid in enumerate(order):
            self.roster.get(pid).pack = packs[i - 1]

    def _count_submitted(self) -> int:
        return sum(
            1 for pid in self.state.player_order
            if pid in self.roster and self.roster.get(pid).pack
        )

    def _all_submitted(self) -> bool:
        order = self.state.player_order
        return bool(order) and self._count_submitted() == len(order)

    def _all_picked(self) -> bool:
        return all(
            pid in self.roster and self.roster.get(pid).has_selected
            for pid in self.state.player_order
        )
