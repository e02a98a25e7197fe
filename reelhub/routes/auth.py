"""
auth.py
-------
Purpose:
    Sign-in and credential endpoints.

Usage:
    1. POST /send-otp, then POST /verify-otp - passwordless login
    2. POST /api/signup, POST /api/password-login - password accounts
    3. POST /api/forgot-password, then POST /api/reset-password-verify
    4. POST /api/change-password (bearer token required)
"""

from fastapi import APIRouter, Depends

from reelhub.auth.verify import current_user
from reelhub.infrastructure.observability.logging import get_logger
from reelhub.models.api.common import SuccessResponse
from reelhub.models.api.user_request import (
    ChangePasswordRequest,
    ForgotPasswordRequest,
    PasswordLoginRequest,
    ResetPasswordRequest,
    SendOtpRequest,
    SignupRequest,
    VerifyOtpRequest,
)
from reelhub.models.api.user_response import LoginResponse, SignupResponse
from reelhub.models.domain.user_domain import UserSummary
from reelhub.routes.dependencies import get_auth_service
from reelhub.services.auth_service import AuthService

router = APIRouter(tags=["auth"])
logger = get_logger(__name__)


@router.post("/send-otp", response_model=SuccessResponse)
async def send_otp(request: SendOtpRequest, auth: AuthService = Depends(get_auth_service)):
    await auth.send_login_code(request.email)
    return SuccessResponse(message="OTP sent successfully!")


@router.post("/verify-otp", response_model=LoginResponse)
async def verify_otp(request: VerifyOtpRequest, auth: AuthService = Depends(get_auth_service)):
    result = await auth.verify_login_code(request.email, request.otp)
    return LoginResponse(token=result.token, user=result.user)


@router.post("/api/signup", response_model=SignupResponse)
async def signup(request: SignupRequest, auth: AuthService = Depends(get_auth_service)):
    user = await auth.signup(request.name, request.email, request.password)
    return SignupResponse(
        user=UserSummary(name=user.name, email=user.email, profile_pic=user.profile_pic)
    )


@router.post("/api/password-login", response_model=LoginResponse)
async def password_login(
    request: PasswordLoginRequest, auth: AuthService = Depends(get_auth_service)
):
    result = await auth.password_login(request.email, request.password)
    return LoginResponse(token=result.token, user=result.user)


@router.post("/api/change-password", response_model=SuccessResponse)
async def change_password(
    request: ChangePasswordRequest,
    email: str = Depends(current_user),
    auth: AuthService = Depends(get_auth_service),
):
    await auth.change_password(email, request.password)
    return SuccessResponse()


@router.post("/api/forgot-password", response_model=SuccessResponse)
async def forgot_password(
    request: ForgotPasswordRequest, auth: AuthService = Depends(get_auth_service)
):
    await auth.request_password_reset(request.email)
    return SuccessResponse(message="Reset OTP sent to your email")


@router.post("/api/reset-password-verify", response_model=SuccessResponse)
async def reset_password_verify(
    request: ResetPasswordRequest, auth: AuthService = Depends(get_auth_service)
):
    await auth.reset_password(request.email, request.otp, request.new_password)
    return SuccessResponse(message="Password reset successful!")
