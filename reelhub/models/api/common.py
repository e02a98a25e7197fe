from typing import Literal

from pydantic import BaseModel


def normalize_email(value: str) -> str:
    return value.strip().lower()


class SuccessResponse(BaseModel):
    """Acknowledgement with no payload."""

    success: Literal[True] = True
    message: str | None = None


class ErrorResponse(BaseModel):
    """Body of every failed request."""

    success: Literal[False] = False
    error: str
    message: str
