# reelhub/models/api/user_response.py
from typing import Literal

from pydantic import BaseModel

from reelhub.models.domain.user_domain import UserProfile, UserRecord, UserSummary


class LoginResponse(BaseModel):
    """Response for /verify-otp and /api/password-login"""

    success: Literal[True] = True
    token: str
    user: UserRecord


class SignupResponse(BaseModel):
    success: Literal[True] = True
    user: UserSummary


class ProfileResponse(BaseModel):
    """Response for /api/user-data and /api/update-profile"""

    success: Literal[True] = True
    user: UserProfile


class FollowResponse(BaseModel):
    success: Literal[True] = True
    action: Literal["follow", "unfollow"]


class FollowersResponse(BaseModel):
    success: Literal[True] = True
    followers: list[UserSummary]


class FollowingResponse(BaseModel):
    success: Literal[True] = True
    following: list[UserSummary]


class UserSearchResponse(BaseModel):
    success: Literal[True] = True
    users: list[UserSummary]
