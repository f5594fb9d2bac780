"""Bounded, newest-first log of finished compositions"""

from collections import deque
from typing import Iterable, List

from .models import HistoryEntry


class HistoryLog:
    """
    Outlives session resets; only a process restart clears it.

    Entries beyond ``capacity`` are evicted from the oldest end.
    """

    def __init__(self, capacity: int):
        if capacity < 1:
            raise ValueError(f"History capacity must be positive, got {capacity}")
        self.capacity = capacity
        self._entries = deque(maxlen=capacity)

    def record(self, entries: Iterable[HistoryEntry]):
        for entry in entries:
            self._entries.appendleft(entry)

    def fetch(self) -> List[HistoryEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
