"""
users.py
--------
Purpose:
    Profile, search and follow-graph endpoints. All require a bearer token.
"""

from fastapi import APIRouter, Depends, Query

from reelhub.auth.verify import current_user
from reelhub.infrastructure.observability.logging import get_logger
from reelhub.models.api.common import normalize_email
from reelhub.models.api.user_request import FollowRequest, UpdateProfileRequest
from reelhub.models.api.user_response import (
    FollowersResponse,
    FollowingResponse,
    FollowResponse,
    ProfileResponse,
    UserSearchResponse,
)
from reelhub.routes.dependencies import get_follow_service, get_user_service
from reelhub.services.follow_service import FollowService
from reelhub.services.user_service import UserService

router = APIRouter(prefix="/api", tags=["users"])
logger = get_logger(__name__)


@router.get("/user-data", response_model=ProfileResponse)
async def user_data(
    email: str | None = Query(None, description="Profile to show; defaults to the caller"),
    me: str = Depends(current_user),
    users: UserService = Depends(get_user_service),
):
    target = normalize_email(email) if email else me
    return ProfileResponse(user=await users.get_profile(target))


@router.post("/update-profile", response_model=ProfileResponse)
async def update_profile(
    request: UpdateProfileRequest,
    me: str = Depends(current_user),
    users: UserService = Depends(get_user_service),
):
    profile = await users.update_profile(me, name=request.name, profile_pic=request.profile_pic)
    return ProfileResponse(user=profile)


@router.get("/search-users", response_model=UserSearchResponse)
async def search_users(
    q: str | None = Query(None),
    me: str = Depends(current_user),
    users: UserService = Depends(get_user_service),
):
    return UserSearchResponse(users=await users.search_users(me, q))


@router.post("/follow", response_model=FollowResponse)
async def follow(
    request: FollowRequest,
    me: str = Depends(current_user),
    follows: FollowService = Depends(get_follow_service),
):
    action = await follows.toggle_follow(me, request.target)
    return FollowResponse(action=action)


@router.get("/followers/{email}", response_model=FollowersResponse)
async def followers(
    email: str,
    _me: str = Depends(current_user),
    users: UserService = Depends(get_user_service),
):
    return FollowersResponse(followers=await users.list_followers(normalize_email(email)))


@router.get("/following/{email}", response_model=FollowingResponse)
async def following(
    email: str,
    _me: str = Depends(current_user),
    users: UserService = Depends(get_user_service),
):
    return FollowingResponse(following=await users.list_following(normalize_email(email)))
