from typing import Literal

from pydantic import BaseModel, Field, field_validator

from reelhub.models.api.common import normalize_email
from reelhub.models.domain.message_domain import ContactSummary, Message


class SendMessageRequest(BaseModel):
    to: str
    content: str = Field(..., max_length=5000)

    @field_validator("to")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return normalize_email(value)


class SendMessageResponse(BaseModel):
    success: Literal[True] = True
    message: str = "Message sent successfully"
    data: Message


class ChatContactsResponse(BaseModel):
    success: Literal[True] = True
    users: list[ContactSummary]


class ConversationResponse(BaseModel):
    success: Literal[True] = True
    messages: list[Message]
