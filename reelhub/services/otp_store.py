"""
One-time code store for OTP login and password reset.

Codes live in Redis under `otp:<purpose>:<email>`. Each entry records its own
`expires_at`, which is what verification checks; the Redis TTL is the window
plus a grace period so stale entries are still evicted without turning an
"expired" answer into "not found".
"""

import json
import secrets
import time
from collections.abc import Callable
from enum import Enum

from reelhub.config import settings
from reelhub.errors import ExpiredError, NotFoundError, OtpMismatchError, ServiceUnavailableError
from reelhub.infrastructure.observability.logging import get_logger
from reelhub.services.redis_client import fast_redis

logger = get_logger(__name__)

OTP_KEY_PREFIX = "otp"


class OtpPurpose(str, Enum):
    LOGIN = "login"
    RESET = "reset"


def default_windows() -> dict[OtpPurpose, int]:
    return {
        OtpPurpose.LOGIN: settings.LOGIN_OTP_TTL_SECONDS,
        OtpPurpose.RESET: settings.RESET_OTP_TTL_SECONDS,
    }


def generate_code() -> str:
    """Six-digit numeric code."""
    return str(100000 + secrets.randbelow(900000))


class OtpStore:
    """
    Issues and verifies one-time codes.

    `backend` needs async get / set_with_ttl / delete (FastRedisClient in
    production); `clock` returns epoch seconds.
    """

    def __init__(
        self,
        backend=None,
        clock: Callable[[], float] = time.time,
        windows: dict[OtpPurpose, int] | None = None,
        code_factory: Callable[[], str] = generate_code,
        grace_seconds: int | None = None,
    ):
        self.backend = backend or fast_redis
        self.clock = clock
        self.windows = windows or default_windows()
        self.code_factory = code_factory
        self.grace_seconds = (
            settings.OTP_KEY_GRACE_SECONDS if grace_seconds is None else grace_seconds
        )

    def _key(self, email: str, purpose: OtpPurpose) -> str:
        return f"{OTP_KEY_PREFIX}:{purpose.value}:{email}"

    async def issue(self, email: str, purpose: OtpPurpose) -> str:
        """
        Create a fresh code for `email`, replacing any outstanding one.

        Raises:
            ServiceUnavailableError: if the code could not be stored
        """
        window = self.windows[purpose]
        code = self.code_factory()
        entry = {"code": code, "expires_at": self.clock() + window}

        stored = await self.backend.set_with_ttl(
            self._key(email, purpose), json.dumps(entry), window + self.grace_seconds
        )
        if not stored:
            raise ServiceUnavailableError("Could not store one-time code", email=email)

        logger.info("One-time code issued", email=email, purpose=purpose.value, window_s=window)
        return code

    async def verify(self, email: str, purpose: OtpPurpose, code: str) -> None:
        """
        Consume a code.

        A matching, unexpired code is deleted and the call returns. An expired
        entry is deleted and ExpiredError raised, whatever value was supplied.
        A mismatch leaves the entry in place.

        Raises:
            NotFoundError: no outstanding code for this email and purpose
            ExpiredError: the code's window has closed
            OtpMismatchError: the value does not match
        """
        key = self._key(email, purpose)
        raw = await self.backend.get(key)
        if raw is None:
            logger.warning("One-time code not found", email=email, purpose=purpose.value)
            raise NotFoundError("OTP not found!", email=email)

        entry = json.loads(raw)
        if self.clock() > entry["expires_at"]:
            await self.backend.delete(key)
            logger.warning("One-time code expired", email=email, purpose=purpose.value)
            raise ExpiredError("OTP expired!", email=email)

        # bytes, since compare_digest rejects non-ASCII str
        expected = str(entry["code"]).encode("utf-8")
        supplied = str(code).strip().encode("utf-8")
        if not secrets.compare_digest(expected, supplied):
            logger.warning("One-time code mismatch", email=email, purpose=purpose.value)
            raise OtpMismatchError("Invalid OTP!", email=email)

        await self.backend.delete(key)
        logger.info("One-time code verified", email=email, purpose=purpose.value)


otp_store = OtpStore()
