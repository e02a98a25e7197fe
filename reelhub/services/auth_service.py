"""
Account authentication: OTP login, password signup/login, and password
change / reset.

Every successful login returns a bearer token for the account's email.
"""

from dataclasses import dataclass

from reelhub.auth.verify import create_access_token
from reelhub.config import settings
from reelhub.errors import (
    AuthError,
    ConflictError,
    NotFoundError,
    ServiceUnavailableError,
    ValidationError,
)
from reelhub.infrastructure.observability.logging import get_logger
from reelhub.models.domain.user_domain import UserRecord
from reelhub.repositories.user_repository import UserRepository
from reelhub.security.hashing import MAX_PASSWORD_BYTES, hash_password, verify_password
from reelhub.services.mailer import MailDeliveryError, mailer
from reelhub.services.otp_store import OtpPurpose, otp_store

logger = get_logger(__name__)


@dataclass(slots=True)
class LoginResult:
    token: str
    user: UserRecord


class AuthService:
    def __init__(self, users=None, otp=None, mail=None):
        self.users = users or UserRepository
        self.otp = otp or otp_store
        self.mail = mail or mailer

    def _check_password(self, password: str | None) -> str:
        if not password or len(password) < settings.PASSWORD_MIN_LENGTH:
            raise ValidationError(
                f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
            )
        if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValidationError(f"Password must be at most {MAX_PASSWORD_BYTES} bytes")
        return password

    async def _deliver(self, email: str, subject: str, body: str, failure: str) -> None:
        try:
            await self.mail.send(email, subject, body)
        except MailDeliveryError as e:
            raise ServiceUnavailableError(failure, email=email) from e

    # -- OTP login -----------------------------------------------------

    async def send_login_code(self, email: str) -> None:
        window_min = self.otp.windows[OtpPurpose.LOGIN] // 60
        code = await self.otp.issue(email, OtpPurpose.LOGIN)
        await self._deliver(
            email,
            "Your OTP Code",
            f"Your OTP is {code}. It will expire in {window_min} minutes.",
            "Error sending OTP",
        )

    async def verify_login_code(self, email: str, code: str) -> LoginResult:
        """Consume a login code; the account is created on first login."""
        await self.otp.verify(email, OtpPurpose.LOGIN, code)

        user = await self.users.get_user(email)
        if user is None:
            user = await self.users.create_user(
                email, email.split("@")[0], None, settings.DEFAULT_PROFILE_PIC
            )
            if user is None:
                # created concurrently by another login
                user = await self.users.get_user(email)

        logger.info("OTP login succeeded", email=email)
        return LoginResult(token=create_access_token(email), user=user)

    # -- passwords -----------------------------------------------------

    async def signup(self, name: str | None, email: str | None, password: str | None) -> UserRecord:
        name = (name or "").strip()
        if not name or not email or not password:
            raise ValidationError("All fields required")
        self._check_password(password)

        user = await self.users.create_user(
            email, name, hash_password(password), settings.DEFAULT_PROFILE_PIC
        )
        if user is None:
            raise ConflictError("Email already registered", email=email)
        return user

    async def password_login(self, email: str, password: str) -> LoginResult:
        user = await self.users.get_user(email)
        if user is None or not user.has_password:
            raise NotFoundError("User not found", email=email)
        if not verify_password(password, user.password_hash):
            logger.warning("Password login rejected", email=email)
            raise AuthError("Invalid password")

        logger.info("Password login succeeded", email=email)
        return LoginResult(token=create_access_token(email), user=user)

    async def change_password(self, email: str, password: str | None) -> None:
        self._check_password(password)
        if not await self.users.update_password(email, hash_password(password)):
            raise NotFoundError("User not found", email=email)
        logger.info("Password changed", email=email)

    async def request_password_reset(self, email: str) -> None:
        if await self.users.get_user(email) is None:
            raise NotFoundError("Email not registered", email=email)

        window_min = self.otp.windows[OtpPurpose.RESET] // 60
        code = await self.otp.issue(email, OtpPurpose.RESET)
        await self._deliver(
            email,
            "Password Reset OTP",
            f"Your password reset OTP is {code}. It will expire in {window_min} minutes.",
            "Failed to send reset email",
        )

    async def reset_password(self, email: str, code: str, new_password: str | None) -> None:
        # validated first so a weak password does not burn the code
        self._check_password(new_password)
        await self.otp.verify(email, OtpPurpose.RESET, code)

        if not await self.users.update_password(email, hash_password(new_password)):
            raise NotFoundError("User not found", email=email)
        logger.info("Password reset completed", email=email)


auth_service = AuthService()
