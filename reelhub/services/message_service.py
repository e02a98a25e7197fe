"""
Direct messaging: send, and fetch a conversation (marking it read).
"""

from reelhub.errors import NotFoundError, ValidationError
from reelhub.infrastructure.observability.logging import get_logger
from reelhub.models.domain.message_domain import Message
from reelhub.repositories.message_repository import MessageRepository
from reelhub.repositories.user_repository import UserRepository

logger = get_logger(__name__)

DEFAULT_CONVERSATION_LIMIT = 100


class MessageService:
    def __init__(self, users=None, messages=None):
        self.users = users or UserRepository
        self.messages = messages or MessageRepository

    async def send_message(self, sender: str, receiver: str | None, content: str | None) -> Message:
        """
        Persist a message with trimmed content.

        Raises:
            ValidationError: receiver missing, or content blank after trimming
            NotFoundError: receiver is not a registered user
        """
        text = (content or "").strip()
        if not receiver or not text:
            raise ValidationError("Missing required fields")

        if not await self.users.get_user(receiver):
            raise NotFoundError("User not found", email=receiver)

        message = await self.messages.insert(sender, receiver, text)
        logger.info("Message sent", sender=sender, receiver=receiver, length=len(text))
        return message

    async def fetch_conversation(
        self, me: str, other: str, limit: int = DEFAULT_CONVERSATION_LIMIT
    ) -> list[Message]:
        """
        Latest `limit` messages between `me` and `other`, oldest first.

        Everything `other` sent to `me` is marked read afterwards; the
        returned list shows the flags as they were before this call.
        """
        if limit < 1:
            raise ValidationError("limit must be positive", limit=limit)

        conversation = await self.messages.conversation(me, other, limit)
        marked = await self.messages.mark_read(other, me)

        logger.debug(
            "Conversation fetched", me=me, other=other, count=len(conversation), marked_read=marked
        )
        return conversation


message_service = MessageService()
