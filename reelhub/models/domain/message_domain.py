from datetime import datetime

from pydantic import BaseModel


class Message(BaseModel):
    """One direct message. Only `read` ever changes after insert."""

    id: int
    sender: str
    receiver: str
    content: str
    created_at: datetime
    read: bool = False


class ContactSummary(BaseModel):
    """Derived chat-contact row; rebuilt on every request."""

    name: str
    email: str
    profile_pic: str
    last_message: str | None = None
    last_message_time: str | None = None
    last_message_at: datetime | None = None
