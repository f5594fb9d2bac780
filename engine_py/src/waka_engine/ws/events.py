"""
WebSocket event models and validation.
"""

import time
from enum import Enum
from typing import Any, Dict, List, Union

import orjson
from pydantic import BaseModel, Field, StrictInt, ValidationError

from ..constants import (
    EVENT_FINISH_TURN, EVENT_JOIN_GAME, EVENT_PICK_CARD, EVENT_READY_TO_PRESENT,
    EVENT_REQUEST_HISTORY, EVENT_REVEAL_STEP, EVENT_START_GAME, EVENT_SUBMIT_PACK,
)


class EventType(str, Enum):
    """Inbound event types."""
    JOIN_GAME = EVENT_JOIN_GAME
    REQUEST_HISTORY = EVENT_REQUEST_HISTORY
    START_GAME = EVENT_START_GAME
    SUBMIT_PACK = EVENT_SUBMIT_PACK
    PICK_CARD = EVENT_PICK_CARD
    READY_TO_PRESENT = EVENT_READY_TO_PRESENT
    REVEAL_STEP = EVENT_REVEAL_STEP
    FINISH_TURN = EVENT_FINISH_TURN


# Inbound event models
class BaseEvent(BaseModel):
    """Base event model."""
    type: EventType


class JoinGameEvent(BaseEvent):
    """Join the lobby under a display name."""
    type: EventType = EventType.JOIN_GAME
    name: str = Field(..., min_length=1, max_length=30)


class RequestHistoryEvent(BaseEvent):
    type: EventType = EventType.REQUEST_HISTORY


class StartGameEvent(BaseEvent):
    type: EventType = EventType.START_GAME


class SubmitPackEvent(BaseEvent):
    """Initial pack; cards are opaque to the server."""
    type: EventType = EventType.SUBMIT_PACK
    cards: List[Any]


class PickCardEvent(BaseEvent):
    type: EventType = EventType.PICK_CARD
    index: StrictInt


class ReadyToPresentEvent(BaseEvent):
    """Final composition, stored as-is."""
    type: EventType = EventType.READY_TO_PRESENT
    composition: Any = None


class RevealStepEvent(BaseEvent):
    """One presentation step, relayed to everyone unchanged."""
    type: EventType = EventType.REVEAL_STEP
    payload: Any = None


class FinishTurnEvent(BaseEvent):
    type: EventType = EventType.FINISH_TURN


# Union type for all inbound events
InboundEvent = Union[
    JoinGameEvent,
    RequestHistoryEvent,
    StartGameEvent,
    SubmitPackEvent,
    PickCardEvent,
    ReadyToPresentEvent,
    RevealStepEvent,
    FinishTurnEvent,
]

EVENT_MAP = {
    EventType.JOIN_GAME: JoinGameEvent,
    EventType.REQUEST_HISTORY: RequestHistoryEvent,
    EventType.START_GAME: StartGameEvent,
    EventType.SUBMIT_PACK: SubmitPackEvent,
    EventType.PICK_CARD: PickCardEvent,
    EventType.READY_TO_PRESENT: ReadyToPresentEvent,
    EventType.REVEAL_STEP: RevealStepEvent,
    EventType.FINISH_TURN: FinishTurnEvent,
}


# Outbound envelope
class OutboundMessage(BaseModel):
    """Every server-to-client frame."""
    type: str
    data: Any = None
    timestamp: float


def parse_inbound_event(raw: Union[str, bytes, Dict[str, Any]]) -> InboundEvent:
    """
    Parse a raw frame into the matching event model.

    Args:
        raw: JSON text or an already decoded dict

    Returns:
        Parsed event model

    Raises:
        ValueError: If the frame is not JSON, the type is unknown or data is malformed
    """
    if isinstance(raw, (str, bytes)):
        try:
            data = orjson.loads(raw)
        except orjson.JSONDecodeError as e:
            raise ValueError(f"Malformed JSON: {e}")
    else:
        data = raw

    if not isinstance(data, dict):
        raise ValueError("Event must be a JSON object")

    event_type = data.get("type")
    if not event_type:
        raise ValueError("Missing event type")

    try:
        event_type = EventType(event_type)
    except ValueError:
        raise ValueError(f"Invalid event type: {event_type}")

    event_class = EVENT_MAP[event_type]
    try:
        return event_class(**data)
    except ValidationError as e:
        raise ValueError(f"Invalid event data: {e.errors()[0]['msg']}")


def create_message(event: str, data: Any = None) -> OutboundMessage:
    """Wrap an outbound event in the wire envelope."""
    return OutboundMessage(type=event, data=data, timestamp=time.time())
