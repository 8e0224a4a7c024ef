"""WebSocket endpoint — the live channel.

Learn: Each client connects to /ws?user_id=<identity>. The handler:
1. Refuses the handshake if the "websocket" feature flag is off
2. Registers the connection under the caller-supplied identity
   (default "anonymous"), closing any connection it replaces
3. Greets the client with {"type": "welcome", ...}
4. Rebroadcasts every JSON object the client sends to all peers
5. Unregisters on disconnect, read error, or a non-object frame

This is a long-lived connection — one coroutine per client. There is
no reconnect logic here; that's the client's job.
"""

import json

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from starlette.websockets import WebSocketState

from pedal.events.types import WELCOME
from pedal.realtime.broadcast import Broadcaster, close_quietly
from pedal.realtime.registry import ConnectionRegistry

logger = structlog.get_logger()
router = APIRouter()

ANONYMOUS = "anonymous"

# Close codes
CLOSE_UNSUPPORTED_DATA = 1003
CLOSE_TRY_AGAIN_LATER = 1013
CLOSE_SUPERSEDED = 4000


@router.websocket("/ws")
async def live_websocket(websocket: WebSocket):
    """Real-time channel: register, greet, rebroadcast, unregister."""
    state = websocket.app.state
    registry: ConnectionRegistry = state.registry
    broadcaster: Broadcaster = state.broadcaster

    if not state.stores.config.feature_enabled("websocket", default=True):
        await websocket.close(code=CLOSE_TRY_AGAIN_LATER, reason="Live channel disabled")
        return

    identity = websocket.query_params.get("user_id") or ANONYMOUS

    # ── Connection accepted ─────────────────────────────────
    await websocket.accept()
    superseded = registry.register(identity, websocket)
    if superseded is not None:
        logger.info("ws.superseded", identity=identity)
        await close_quietly(
            superseded, code=CLOSE_SUPERSEDED, reason="Replaced by a newer connection"
        )
    logger.info("ws.connected", identity=identity, online=registry.count())

    close_code = 1000
    try:
        await websocket.send_text(
            json.dumps({"type": WELCOME, "identity": identity, "online": registry.count()})
        )
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except json.JSONDecodeError:
                message = None
            if not isinstance(message, dict):
                logger.warning("ws.bad_frame", identity=identity)
                close_code = CLOSE_UNSUPPORTED_DATA
                break
            await broadcaster.broadcast(message)
    except WebSocketDisconnect:
        pass
    except RuntimeError as e:
        # Socket already closed on our side (pruned or superseded)
        logger.info("ws.read_error", identity=identity, error=str(e))
    finally:
        registry.unregister(identity, websocket)
        logger.info("ws.disconnected", identity=identity, online=registry.count())
        if websocket.client_state == WebSocketState.CONNECTED:
            await close_quietly(websocket, code=close_code)
