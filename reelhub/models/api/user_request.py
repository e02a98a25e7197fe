# reelhub/models/api/user_request.py
from pydantic import BaseModel, Field, field_validator

from reelhub.models.api.common import normalize_email


class EmailRequest(BaseModel):
    """Any request that names an account by email."""

    email: str = Field(..., min_length=3, max_length=254)

    @field_validator("email")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return normalize_email(value)


class SendOtpRequest(EmailRequest):
    pass


class VerifyOtpRequest(EmailRequest):
    otp: str = Field(..., min_length=1, max_length=12)


class SignupRequest(EmailRequest):
    name: str = Field(..., max_length=100)
    password: str


class PasswordLoginRequest(EmailRequest):
    password: str


class ForgotPasswordRequest(EmailRequest):
    pass


class ResetPasswordRequest(EmailRequest):
    otp: str = Field(..., min_length=1, max_length=12)
    new_password: str = Field(..., alias="newPassword")

    model_config = {"populate_by_name": True}


class ChangePasswordRequest(BaseModel):
    password: str


class UpdateProfileRequest(BaseModel):
    """Either field may be omitted; omitted fields are left unchanged."""

    name: str | None = Field(None, max_length=100)
    profile_pic: str | None = Field(None, max_length=500)


class FollowRequest(BaseModel):
    target: str

    @field_validator("target")
    @classmethod
    def _normalize(cls, value: str) -> str:
        return normalize_email(value)
