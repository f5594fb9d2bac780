"""
Outbound side effects produced by the session.

The session never talks to sockets itself; every handler returns a list of
these records and the transport delivers them in order.
"""

from dataclasses import dataclass
from typing import Any, List, Union


@dataclass(frozen=True)
class Broadcast:
    """Send ``event`` to every open connection."""
    event: str
    data: Any = None


@dataclass(frozen=True)
class Unicast:
    """Send ``event`` to a single connection."""
    target: str
    event: str
    data: Any = None


@dataclass(frozen=True)
class CloseAll:
    """Sever every open connection."""


Effect = Union[Broadcast, Unicast, CloseAll]
Effects = List[Effect]

