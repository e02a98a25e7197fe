"""
Video posts: registration, feed, and like/view counters.
"""

from reelhub.errors import ConflictError, NotFoundError, ValidationError
from reelhub.infrastructure.observability.logging import get_logger
from reelhub.models.domain.user_domain import FeedItem, VideoPost
from reelhub.repositories.user_repository import UserRepository
from reelhub.repositories.video_repository import Counter, VideoRepository

logger = get_logger(__name__)

DEFAULT_TITLE = "Untitled"


class VideoService:
    def __init__(self, videos=None, users=None):
        self.videos = videos or VideoRepository
        self.users = users or UserRepository

    async def register_video(self, owner: str, title: str | None, file_ref: str | None) -> VideoPost:
        """Record a post for a file the upload collaborator has already stored."""
        if not file_ref or not file_ref.strip():
            raise ValidationError("No file uploaded!")
        if not await self.users.get_user(owner):
            raise NotFoundError("User not found", email=owner)

        post = await self.videos.add(owner, (title or "").strip() or DEFAULT_TITLE, file_ref.strip())
        if post is None:
            raise ConflictError("File already registered", file_ref=file_ref)

        logger.info("Video registered", owner=owner, file_ref=post.file_ref, video_id=post.id)
        return post

    async def list_videos(self, owner: str) -> list[VideoPost]:
        return await self.videos.list_for_owner(owner)

    async def list_feed(self) -> list[FeedItem]:
        return await self.videos.list_feed()

    async def _increment(self, file_ref: str, counter: Counter) -> VideoPost:
        post = await self.videos.increment(file_ref, counter)
        if post is None:
            raise NotFoundError("Reel not found", file_ref=file_ref)

        logger.debug("Video counter incremented", file_ref=file_ref, counter=counter)
        return post

    async def increment_like(self, file_ref: str) -> int:
        """Returns the post's new like count."""
        return (await self._increment(file_ref, "likes")).likes

    async def increment_view(self, file_ref: str) -> int:
        """Returns the post's new view count."""
        return (await self._increment(file_ref, "views")).views


video_service = VideoService()
