"""Travel assistant chat endpoints"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from wanderplan.core.dependencies import get_chat_service
from wanderplan.schemas.base import Envelope, Message
from wanderplan.schemas.chat import ChatMessageRead, ChatReply, ChatRequest
from wanderplan.services.chat_service import ChatService, welcome_message

router = APIRouter(prefix="/chat", tags=["chat"])


@router.get("/welcome", response_model=Envelope[Message])
async def get_welcome(destination: Optional[str] = Query(None, max_length=255)):
    return Envelope(status="ok", data=Message(message=welcome_message(destination)))


@router.get("/messages", response_model=Envelope[list[ChatMessageRead]])
async def list_chat_history(service: ChatService = Depends(get_chat_service)):
    """Chat history, oldest first"""
    messages = await service.list_chat_history()
    return Envelope(status="ok", data=[ChatMessageRead.model_validate(m) for m in messages])


@router.post("", response_model=Envelope[ChatReply])
async def send_message(payload: ChatRequest, service: ChatService = Depends(get_chat_service)):
    """
    Send a message to the assistant

    Messages are saved only for signed-in users.
    """
    reply = await service.send_message(payload.content, payload.preferences)
    return Envelope(status="ok", data=reply)
