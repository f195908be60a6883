"""
WebSocket endpoint for project chat rooms.

Clients send JSON frames, as text or UTF-8 bytes:
    {"type": "join_project", "projectId": 7}
    {"type": "send_message", "projectId": 7, "userId": 3, "content": "hi"}

and receive "joined", "new_message" and "error" frames.
"""

import asyncio
import contextlib

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from starlette.concurrency import run_in_threadpool
from starlette.websockets import WebSocketState

from teamup.exceptions import ConnectionStateError
from teamup.logging import LogContext, get_logger
from teamup.relay import BroadcastRelay, SendMessageFrame
from teamup.services import ChatService

from ..dependencies import SessionScope, get_relay, get_session_scope

logger = get_logger("realtime")

router = APIRouter(tags=["realtime"])


def _persist_message(session_scope: SessionScope, frame: SendMessageFrame) -> dict:
    with session_scope() as session:
        return ChatService(session).create_message(frame.project_id, frame.user_id, frame.content)


@router.websocket("/ws")
async def project_socket(
    websocket: WebSocket,
    relay: BroadcastRelay = Depends(get_relay),
    session_scope: SessionScope = Depends(get_session_scope),
):
    await websocket.accept()
    connection = relay.open_connection(websocket)

    async def on_send_message(frame: SendMessageFrame) -> dict:
        return await run_in_threadpool(_persist_message, session_scope, frame)

    with LogContext(connection_id=connection.id):
        sender = asyncio.create_task(relay.pump(connection))
        try:
            while True:
                received = await websocket.receive()
                if received["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(received.get("code", 1000))
                raw = received.get("text")
                if raw is None:
                    raw = received.get("bytes")
                if not connection.is_open:
                    break
                await relay.handle_client_message(connection, raw, on_send_message=on_send_message)
        except WebSocketDisconnect as exc:
            logger.info("websocket_closed", code=exc.code)
        except ConnectionStateError:
            logger.info("websocket_dropped_by_relay")
        finally:
            await relay.disconnect(connection)
            sender.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await sender
            if websocket.client_state == WebSocketState.CONNECTED:
                await websocket.close(code=1011)
