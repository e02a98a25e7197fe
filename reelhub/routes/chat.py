"""
chat.py
-------
Purpose:
    Poll-based direct messaging: contact list, send, and fetch.
"""

from fastapi import APIRouter, Depends, Query

from reelhub.auth.verify import current_user
from reelhub.models.api.chat_models import (
    ChatContactsResponse,
    ConversationResponse,
    SendMessageRequest,
    SendMessageResponse,
)
from reelhub.models.api.common import normalize_email
from reelhub.routes.dependencies import get_contact_aggregator, get_message_service
from reelhub.services.contact_service import ContactAggregator
from reelhub.services.message_service import DEFAULT_CONVERSATION_LIMIT, MessageService

router = APIRouter(prefix="/api", tags=["chat"])


@router.get("/chat-users", response_model=ChatContactsResponse)
async def chat_users(
    me: str = Depends(current_user),
    contacts: ContactAggregator = Depends(get_contact_aggregator),
):
    return ChatContactsResponse(users=await contacts.list_chat_contacts(me))


@router.post("/send-message", response_model=SendMessageResponse)
async def send_message(
    request: SendMessageRequest,
    me: str = Depends(current_user),
    messages: MessageService = Depends(get_message_service),
):
    message = await messages.send_message(me, request.to, request.content)
    return SendMessageResponse(data=message)


@router.get("/messages/{email}", response_model=ConversationResponse)
async def get_messages(
    email: str,
    limit: int = Query(DEFAULT_CONVERSATION_LIMIT, ge=1, le=500),
    me: str = Depends(current_user),
    messages: MessageService = Depends(get_message_service),
):
    conversation = await messages.fetch_conversation(me, normalize_email(email), limit)
    return ConversationResponse(messages=conversation)
