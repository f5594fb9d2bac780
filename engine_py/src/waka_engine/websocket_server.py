"""WebSocket server for real-time multiplayer communication"""

import asyncio
import logging
import uuid
from typing import Dict, Optional

from fastapi import WebSocket, WebSocketDisconnect

from .constants import MSG_ERROR
from .errors import INTERNAL_ERROR, INVALID_EVENT
from .effects import Broadcast, CloseAll, Effects, Unicast
from .engine import WakaSession
from .rules import config_from_env
from .ws.events import (
    FinishTurnEvent, JoinGameEvent, PickCardEvent, ReadyToPresentEvent, RequestHistoryEvent,
    RevealStepEvent, StartGameEvent, SubmitPackEvent, create_message, parse_inbound_event,
)

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self.active_connections: Dict[str, WebSocket] = {}

    async def connect(self, websocket: WebSocket, connection_id: str):
        await websocket.accept()
        self.active_connections[connection_id] = websocket
        logger.info(f"Connection {connection_id} opened")

    def disconnect(self, connection_id: str) -> bool:
        if connection_id in self.active_connections:
            del self.active_connections[connection_id]
            logger.info(f"Connection {connection_id} closed")
            return True
        return False

    async def send_personal_message(self, event: str, data, connection_id: str):
        websocket = self.active_connections.get(connection_id)
        if websocket is None:
            return
        try:
            await websocket.send_text(create_message(event, data).model_dump_json())
        except Exception as e:
            logger.error(f"Error sending {event} to {connection_id}: {e}")
            self.disconnect(connection_id)

    async def broadcast(self, event: str, data=None):
        text = create_message(event, data).model_dump_json()
        disconnected = []
        for connection_id, websocket in list(self.active_connections.items()):
            try:
                await websocket.send_text(text)
            except Exception as e:
                logger.error(f"Error broadcasting {event} to {connection_id}: {e}")
                disconnected.append(connection_id)

        for connection_id in disconnected:
            self.disconnect(connection_id)

    async def close_all(self):
        connections = list(self.active_connections.items())
        for connection_id, websocket in connections:
            self.disconnect(connection_id)
            try:
                await websocket.close()
            except Exception as e:
                logger.error(f"Error closing {connection_id}: {e}")
        logger.info(f"Closed {len(connections)} connections")


class GameWebSocketManager:
    """Feeds socket events to the session one at a time and delivers what it returns."""

    def __init__(self, session: Optional[WakaSession] = None):
        self.session = session if session is not None else WakaSession(config_from_env())
        self.connection_manager = ConnectionManager()
        self.lock = asyncio.Lock()

    async def handle_websocket(self, websocket: WebSocket, connection_id: str = None):
        if not connection_id:
            connection_id = str(uuid.uuid4())

        await self.connection_manager.connect(websocket, connection_id)

        try:
            while True:
                data = await websocket.receive_text()
                await self.handle_message(data, connection_id)
                if connection_id not in self.connection_manager.active_connections:
                    # closed by the server (game over or failed send)
                    break

        except WebSocketDisconnect:
            logger.info(f"WebSocket disconnected for {connection_id}")
        except RuntimeError as e:
            if connection_id in self.connection_manager.active_connections:
                logger.error(f"WebSocket error for {connection_id}: {e}")
            else:
                logger.info(f"WebSocket for {connection_id} already closed: {e}")
        except Exception as e:
            logger.error(f"WebSocket error for {connection_id}: {e}")
        finally:
            await self.handle_disconnect(connection_id)

    async def handle_message(self, raw, connection_id: str):
        try:
            event = parse_inbound_event(raw)
        except ValueError as e:
            logger.warning(f"[{INVALID_EVENT}] Invalid event from {connection_id}: {e}")
            await self.connection_manager.send_personal_message(MSG_ERROR, str(e), connection_id)
            return

        async with self.lock:
            try:
                effects = self.dispatch(event, connection_id)
            except Exception:
                logger.exception(f"[{INTERNAL_ERROR}] Error handling {event.type.value} from {connection_id}")
                await self.connection_manager.send_personal_message(
                    MSG_ERROR, "Internal server error", connection_id)
                return
            await self.deliver(effects)

    def dispatch(self, event, connection_id: str) -> Effects:
        session = self.session
        if isinstance(event, JoinGameEvent):
            return session.join(connection_id, event.name)
        elif isinstance(event, RequestHistoryEvent):
            return session.request_history(connection_id)
        elif isinstance(event, StartGameEvent):
            return session.start_game(connection_id)
        elif isinstance(event, SubmitPackEvent):
            return session.submit_pack(connection_id, event.cards)
        elif isinstance(event, PickCardEvent):
            return session.pick_card(connection_id, event.index)
        elif isinstance(event, ReadyToPresentEvent):
            return session.ready_to_present(connection_id, event.composition)
        elif isinstance(event, RevealStepEvent):
            return session.reveal_step(connection_id, event.payload)
        elif isinstance(event, FinishTurnEvent):
            return session.finish_turn(connection_id)
        raise ValueError(f"Unhandled event type: {type(event)}")

    async def handle_disconnect(self, connection_id: str):
        self.connection_manager.disconnect(connection_id)
        async with self.lock:
            effects = self.session.disconnect(connection_id)
            await self.deliver(effects)

    async def deliver(self, effects: Effects):
        for effect in effects:
            if isinstance(effect, Broadcast):
                await self.connection_manager.broadcast(effect.event, effect.data)
            elif isinstance(effect, Unicast):
                await self.connection_manager.send_personal_message(
                    effect.event, effect.data, effect.target)
            elif isinstance(effect, CloseAll):
                await self.connection_manager.close_all()

    def health(self) -> dict:
        snapshot = self.session.snapshot()
        return {
            "status": "healthy",
            "phase": snapshot["phase"],
            "players": len(snapshot["players"]),
            "connections": len(self.connection_manager.active_connections),
        }


# Global instance
game_manager = GameWebSocketManager()
