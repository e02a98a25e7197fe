from typing import Literal

from pydantic import BaseModel, Field

from reelhub.models.domain.user_domain import FeedItem, VideoPost


class RegisterReelRequest(BaseModel):
    title: str | None = Field(None, max_length=200)
    file: str = Field(..., description="Reference of the already stored video file")


class ReelRefRequest(BaseModel):
    file: str


class RegisterReelResponse(BaseModel):
    success: Literal[True] = True
    message: str = "Reel uploaded!"
    reels: list[VideoPost]


class LikeResponse(BaseModel):
    success: Literal[True] = True
    likes: int


class ViewResponse(BaseModel):
    success: Literal[True] = True
    views: int


class FeedResponse(BaseModel):
    success: Literal[True] = True
    reels: list[FeedItem]
