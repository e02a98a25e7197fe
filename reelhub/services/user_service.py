"""
User directory service.
Profile lookups, profile edits, search, and follower / following listings.

Service layer returns domain models only - API layer handles HTTP concerns.
"""

from reelhub.errors import NotFoundError, ValidationError
from reelhub.infrastructure.observability.logging import get_logger
from reelhub.models.domain.user_domain import UserProfile, UserRecord, UserSummary
from reelhub.repositories.user_repository import UserRepository
from reelhub.repositories.video_repository import VideoRepository

logger = get_logger(__name__)

SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 20


class UserService:
    def __init__(self, users=None, videos=None):
        self.users = users or UserRepository
        self.videos = videos or VideoRepository

    async def require_user(self, email: str) -> UserRecord:
        user = await self.users.get_user(email)
        if not user:
            raise NotFoundError("User not found", email=email)
        return user

    async def get_profile(self, email: str) -> UserProfile:
        """Full profile: record, posts, and both sides of the follow graph."""
        user = await self.require_user(email)
        reels = await self.videos.list_for_owner(email)
        followers = await self.users.list_followers(email)
        following = await self.users.list_following(email)

        return UserProfile(
            name=user.name,
            email=user.email,
            profile_pic=user.profile_pic,
            total_views=user.total_views,
            total_likes=user.total_likes,
            reels=reels,
            followers=followers,
            following=following,
            created_at=user.created_at,
        )

    async def update_profile(
        self, email: str, name: str | None = None, profile_pic: str | None = None
    ) -> UserProfile:
        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Name cannot be empty")

        updated = await self.users.update_profile(email, name=name, profile_pic=profile_pic)
        if not updated:
            raise NotFoundError("User not found", email=email)

        logger.info(
            "Profile updated",
            email=email,
            name_changed=name is not None,
            picture_changed=profile_pic is not None,
        )
        return await self.get_profile(email)

    async def search_users(self, me: str, term: str | None) -> list[UserSummary]:
        term = (term or "").strip()
        if len(term) < SEARCH_MIN_LENGTH:
            return []
        return await self.users.search(term, exclude=me, limit=SEARCH_LIMIT)

    async def list_followers(self, email: str) -> list[UserSummary]:
        await self.require_user(email)
        return await self.summaries(await self.users.list_followers(email))

    async def list_following(self, email: str) -> list[UserSummary]:
        await self.require_user(email)
        return await self.summaries(await self.users.list_following(email))

    async def summaries(self, emails: list[str]) -> list[UserSummary]:
        """Resolve emails to public cards, keeping order and dropping unknowns."""
        found = await self.users.get_users(emails)
        return [
            UserSummary(name=user.name, email=user.email, profile_pic=user.profile_pic)
            for user in (found.get(email) for email in emails)
            if user is not None
        ]


user_service = UserService()
