"""
Project chat endpoints.

Messages are persisted first and only then published to the realtime relay.
"""

from fastapi import APIRouter, Depends, Query, status
from starlette.concurrency import run_in_threadpool

from teamup.constants import DEFAULT_CHAT_HISTORY_LIMIT
from teamup.relay import BroadcastRelay
from teamup.services import ChatService

from ..dependencies import get_chat_service, get_relay
from ..schemas import ChatHistoryResponse, ChatMessageCreateRequest, ChatMessageResponse

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("", response_model=ChatHistoryResponse)
def get_messages(
    project_id: int | None = Query(default=None),
    limit: int = Query(default=DEFAULT_CHAT_HISTORY_LIMIT, ge=1),
    service: ChatService = Depends(get_chat_service),
):
    """Recent messages of a project, oldest first."""
    return ChatHistoryResponse(messages=service.list_messages(project_id, limit=limit))


@router.post("", response_model=ChatMessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    payload: ChatMessageCreateRequest,
    service: ChatService = Depends(get_chat_service),
    relay: BroadcastRelay = Depends(get_relay),
):
    """Store a message from a project member and push it to the project's subscribers."""
    message = await run_in_threadpool(
        service.create_message, payload.project_id, payload.user_id, payload.content
    )
    await relay.publish(payload.project_id, message)
    return message
