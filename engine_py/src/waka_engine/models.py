"""Session models and data structures"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .constants import PHASE_LOBBY


@dataclass
class Player:
    id: str
    name: str
    pack: List[Any] = field(default_factory=list)  # cards still to be drafted
    hand: List[Any] = field(default_factory=list)  # picks, in pick order
    selected: Optional[Any] = None  # pending pick for the current round
    has_selected: bool = False  # a card payload may itself be falsy
    final_composition: Optional[Any] = None

    def clear_game_state(self):
        self.pack = []
        self.hand = []
        self.selected = None
        self.has_selected = False
        self.final_composition = None


@dataclass
class SessionState:
    phase: str = PHASE_LOBBY
    player_order: List[str] = field(default_factory=list)
    reveal_order: List[str] = field(default_factory=list)
    reveal_cursor: int = 0


@dataclass(frozen=True)
class HistoryEntry:
    name: str
    composition: Any

    def to_dict(self) -> dict:
        return {'name': self.name, 'composition': self.composition}
