"""
Real-time admin channel

Admin dashboards connect to /ws/admin?token=<jwt> and receive
{"event": "evaluation:submitted" | "evaluation:updated", "data": <evaluation>}.
Events missed while disconnected are not replayed.
"""
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from faculty_eval import state
from faculty_eval.api.deps import resolve_token
from faculty_eval.core.errors import Unauthorized
from faculty_eval.core.notifier import ADMIN_ROOM
from faculty_eval.core.roles import Capability, can


logger = logging.getLogger(__name__)

router = APIRouter(tags=["realtime"])


@router.websocket("/ws/admin")
async def admin_socket(websocket: WebSocket):
    token = websocket.query_params.get("token")
    try:
        user = resolve_token(state.STORE, token)
    except Unauthorized as e:
        logger.info(f"🚫 Rejected admin socket: {e.message}")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    if not can(user.role, Capability.VIEW_EVALUATIONS):
        logger.info(f"🚫 Rejected admin socket for {user.role.value} {user.email}")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    state.HUB.join(ADMIN_ROOM, websocket)
    try:
        # Nothing is expected from clients; keep reading until they leave
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        state.HUB.leave(ADMIN_ROOM, websocket)
