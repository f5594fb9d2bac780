"""
WebSocket wire format for the session server.
"""

from .events import (
    EventType, InboundEvent, OutboundMessage, create_message, parse_inbound_event,
)

__all__ = ["EventType", "InboundEvent", "OutboundMessage", "create_message", "parse_inbound_event"]
