"""
Payload shaping for outbound messages.
"""

from typing import Any, Dict, Iterable, List

from .models import HistoryEntry, Player


def serialize_entries(entries: Iterable[HistoryEntry]) -> List[Dict[str, Any]]:
    """Result / history entries as ``{name, composition}`` dicts."""
    return [entry.to_dict() for entry in entries]


def serialize_player(player: Player) -> Dict[str, Any]:
    """Public view of a player: counts only, never card contents."""
    return {
        'id': player.id,
        'name': player.name,
        'pack_count': len(player.pack),
        'hand_count': len(player.hand),
        'has_selected': player.has_selected,
        'ready': player.final_composition is not None,
    }
