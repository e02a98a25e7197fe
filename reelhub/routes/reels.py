"""
reels.py
--------
Purpose:
    Video post registration, feed, and like/view counters.

Notes:
    The video bytes are stored by the upload collaborator; these endpoints
    only deal with the resulting file reference.
"""

from fastapi import APIRouter, Depends

from reelhub.auth.verify import current_user
from reelhub.models.api.video_models import (
    FeedResponse,
    LikeResponse,
    ReelRefRequest,
    RegisterReelRequest,
    RegisterReelResponse,
    ViewResponse,
)
from reelhub.routes.dependencies import get_video_service
from reelhub.services.video_service import VideoService

router = APIRouter(prefix="/api", tags=["reels"])


@router.post("/upload-reel", response_model=RegisterReelResponse)
async def upload_reel(
    request: RegisterReelRequest,
    me: str = Depends(current_user),
    videos: VideoService = Depends(get_video_service),
):
    await videos.register_video(me, request.title, request.file)
    return RegisterReelResponse(reels=await videos.list_videos(me))


@router.post("/like-reel", response_model=LikeResponse)
async def like_reel(
    request: ReelRefRequest,
    _me: str = Depends(current_user),
    videos: VideoService = Depends(get_video_service),
):
    return LikeResponse(likes=await videos.increment_like(request.file))


@router.post("/view-reel", response_model=ViewResponse)
async def view_reel(
    request: ReelRefRequest,
    _me: str = Depends(current_user),
    videos: VideoService = Depends(get_video_service),
):
    return ViewResponse(views=await videos.increment_view(request.file))


@router.get("/all-reels", response_model=FeedResponse)
async def all_reels(
    _me: str = Depends(current_user),
    videos: VideoService = Depends(get_video_service),
):
    return FeedResponse(reels=await videos.list_feed())
