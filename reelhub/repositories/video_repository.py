"""
Persistence for video posts and their counters.
"""

from typing import Literal

from reelhub.db.helpers import fetch_all, fetch_one
from reelhub.infrastructure.observability.logging import get_logger
from reelhub.models.domain.user_domain import FeedItem, VideoPost

logger = get_logger(__name__)

VIDEO_COLUMNS = "id, owner_email, title, file_ref, views, likes, created_at"

Counter = Literal["likes", "views"]

# post column -> owner aggregate column
_AGGREGATE_COLUMNS = {"likes": "total_likes", "views": "total_views"}


class VideoRepository:
    """Postgres-backed video posts."""

    @classmethod
    async def add(cls, owner_email: str, title: str, file_ref: str) -> VideoPost | None:
        """Insert a post. Returns None when the file reference is already taken."""
        query = f"""
            INSERT INTO videos (owner_email, title, file_ref)
            VALUES (%s, %s, %s)
            ON CONFLICT (file_ref) DO NOTHING
            RETURNING {VIDEO_COLUMNS}
        """
        row = await fetch_one(query, (owner_email, title, file_ref))
        return VideoPost(**row) if row else None

    @classmethod
    async def list_for_owner(cls, owner_email: str) -> list[VideoPost]:
        rows = await fetch_all(
            f"SELECT {VIDEO_COLUMNS} FROM videos WHERE owner_email = %s ORDER BY created_at, id",
            (owner_email,),
        )
        return [VideoPost(**row) for row in rows]

    @classmethod
    async def list_feed(cls) -> list[FeedItem]:
        query = """
            SELECT v.id, v.owner_email, v.title, v.file_ref, v.views, v.likes, v.created_at,
                   u.name, u.profile_pic
            FROM videos v
            JOIN users u ON u.email = v.owner_email
            ORDER BY v.created_at DESC, v.id DESC
        """
        rows = await fetch_all(query)
        return [FeedItem(**row) for row in rows]

    @classmethod
    async def increment(cls, file_ref: str, counter: Counter) -> VideoPost | None:
        """
        Add one to a post counter and to its owner's aggregate.

        Both updates are one statement, so they commit together and each is
        an in-place increment. Returns the updated post, None if no post has
        that file reference.
        """
        if counter not in _AGGREGATE_COLUMNS:
            raise ValueError(f"Unknown counter: {counter}")
        aggregate = _AGGREGATE_COLUMNS[counter]

        # column names come from the fixed map above, never from input
        query = f"""
            WITH bumped AS (
                UPDATE videos SET {counter} = {counter} + 1
                WHERE file_ref = %s
                RETURNING {VIDEO_COLUMNS}
            ), owner AS (
                UPDATE users SET {aggregate} = {aggregate} + 1
                FROM bumped
                WHERE users.email = bumped.owner_email
            )
            SELECT * FROM bumped
        """
        row = await fetch_one(query, (file_ref,))
        return VideoPost(**row) if row else None
