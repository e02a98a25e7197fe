from datetime import datetime

from pydantic import BaseModel, Field


class VideoPost(BaseModel):
    """A short video owned by exactly one user."""

    id: int
    owner_email: str
    title: str
    file_ref: str
    views: int = 0
    likes: int = 0
    created_at: datetime


class FeedItem(VideoPost):
    """Video post joined with its owner's public profile."""

    name: str
    profile_pic: str


class UserSummary(BaseModel):
    """Public card for a user (lists, search results)."""

    name: str
    email: str
    profile_pic: str


class UserRecord(UserSummary):
    """A row of the users table."""

    password_hash: str | None = Field(None, exclude=True)
    total_views: int = 0
    total_likes: int = 0
    created_at: datetime

    @property
    def has_password(self) -> bool:
        return bool(self.password_hash)


class UserProfile(UserSummary):
    """User record enriched with posts and both sides of the follow graph."""

    total_views: int = 0
    total_likes: int = 0
    reels: list[VideoPost] = Field(default_factory=list)
    followers: list[str] = Field(default_factory=list)
    following: list[str] = Field(default_factory=list)
    created_at: datetime
