"""
Notification channel for admin dashboards

The scoring workflow receives a Notifier and only ever calls publish().
Delivery is best-effort: a socket that fails to receive is dropped and the
event is lost for it. Reconnecting admins re-fetch state over HTTP.
"""
import logging
from typing import Any, Dict, Protocol, Set

from fastapi import WebSocket


logger = logging.getLogger(__name__)

ADMIN_ROOM = "admin-room"

EVENT_SUBMITTED = "evaluation:submitted"
EVENT_UPDATED = "evaluation:updated"


class Notifier(Protocol):
    async def publish(self, room: str, event: str, payload: Dict[str, Any]) -> None:
        ...


class NullNotifier:
    """Discards every event"""

    async def publish(self, room: str, event: str, payload: Dict[str, Any]) -> None:
        return None


class ConnectionHub:
    """
    Rooms of connected WebSockets

    Messages are sent as {"event": <kind>, "data": <payload>}.
    """

    def __init__(self):
        self.rooms: Dict[str, Set[WebSocket]] = {}

    def join(self, room: str, websocket: WebSocket) -> None:
        self.rooms.setdefault(room, set()).add(websocket)
        logger.info(f"🔌 Socket joined {room} ({len(self.rooms[room])} connected)")

    def leave(self, room: str, websocket: WebSocket) -> None:
        members = self.rooms.get(room)
        if members is None:
            return
        members.discard(websocket)
        if not members:
            del self.rooms[room]

    def subscriber_count(self, room: str) -> int:
        return len(self.rooms.get(room, ()))

    async def publish(self, room: str, event: str, payload: Dict[str, Any]) -> None:
        message = {"event": event, "data": payload}
        for websocket in list(self.rooms.get(room, ())):
            try:
                await websocket.send_json(message)
            except Exception as e:
                # Fire-and-forget: drop the dead socket, no retry
                logger.debug(f"Dropping socket from {room} after failed send: {type(e).__name__}: {e}")
                self.leave(room, websocket)
