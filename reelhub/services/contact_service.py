"""
Chat contact aggregation.

A user's chat contacts are everyone they follow or who follows them. Each
contact carries a preview of the latest message exchanged in either
direction, and the list is ordered by that message's timestamp.
"""

from __future__ import annotations

from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from reelhub.config import settings
from reelhub.errors import NotFoundError
from reelhub.infrastructure.observability.logging import get_logger
from reelhub.models.domain.message_domain import ContactSummary, Message
from reelhub.models.domain.user_domain import UserRecord
from reelhub.repositories.message_repository import MessageRepository
from reelhub.repositories.user_repository import UserRepository

logger = get_logger(__name__)

PREVIEW_LENGTH = 50
ELLIPSIS = "..."


def truncate_preview(content: str, limit: int = PREVIEW_LENGTH) -> str:
    if len(content) > limit:
        return content[:limit] + ELLIPSIS
    return content


def format_message_time(timestamp: datetime, tz: ZoneInfo | None = None) -> str:
    """Wall-clock HH:MM of a message in the display timezone."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=UTC)
    return timestamp.astimezone(tz or ZoneInfo(settings.DISPLAY_TIMEZONE)).strftime("%H:%M")


def contact_sort_key(contact: ContactSummary) -> tuple:
    # contacts without a message go last; email makes the order total
    if contact.last_message_at is None:
        return (1, 0.0, contact.email)
    return (0, -contact.last_message_at.timestamp(), contact.email)


def sort_contacts(contacts: list[ContactSummary]) -> list[ContactSummary]:
    return sorted(contacts, key=contact_sort_key)


def build_summary(
    user: UserRecord, last: Message | None, tz: ZoneInfo | None = None
) -> ContactSummary:
    if last is None:
        return ContactSummary(name=user.name, email=user.email, profile_pic=user.profile_pic)

    return ContactSummary(
        name=user.name,
        email=user.email,
        profile_pic=user.profile_pic,
        last_message=truncate_preview(last.content),
        last_message_time=format_message_time(last.created_at, tz),
        last_message_at=last.created_at,
    )


class ContactAggregator:
    def __init__(self, users=None, messages=None, tz: ZoneInfo | None = None):
        self.users = users or UserRepository
        self.messages = messages or MessageRepository
        self.tz = tz

    async def candidate_emails(self, me: str) -> list[str]:
        following = await self.users.list_following(me)
        followers = await self.users.list_followers(me)
        # dict keeps first-seen order while deduplicating
        merged = dict.fromkeys(following + followers)
        merged.pop(me, None)
        return list(merged)

    async def list_chat_contacts(self, me: str) -> list[ContactSummary]:
        if not await self.users.get_user(me):
            raise NotFoundError("User not found", email=me)

        candidates = await self.candidate_emails(me)
        profiles = await self.users.get_users(candidates)

        contacts = []
        for email in candidates:
            user = profiles.get(email)
            if user is None:
                logger.warning("Chat contact has no user record", me=me, contact=email)
                continue
            last = await self.messages.latest_between(me, email)
            contacts.append(build_summary(user, last, self.tz))

        ordered = sort_contacts(contacts)
        logger.debug(
            "Chat contacts aggregated",
            me=me,
            contacts=len(ordered),
            with_messages=sum(1 for c in ordered if c.last_message_at is not None),
        )
        return ordered


contact_aggregator = ContactAggregator()
