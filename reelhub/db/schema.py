"""
Table definitions.

Follow edges live in a single table: a user's followers and followees are
both read from `follows`, so the two views can never disagree.
"""

from reelhub.db.helpers import db_transaction
from reelhub.infrastructure.observability.logging import get_logger

logger = get_logger(__name__)

SCHEMA_STATEMENTS = [
    """
    CREATE TABLE IF NOT EXISTS users (
        email TEXT PRIMARY KEY,
        name TEXT NOT NULL,
        password_hash TEXT,
        profile_pic TEXT NOT NULL DEFAULT '/default.png',
        total_views BIGINT NOT NULL DEFAULT 0,
        total_likes BIGINT NOT NULL DEFAULT 0,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS follows (
        follower_email TEXT NOT NULL REFERENCES users (email),
        followee_email TEXT NOT NULL REFERENCES users (email),
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        PRIMARY KEY (follower_email, followee_email),
        CHECK (follower_email <> followee_email)
    )
    """,
    "CREATE INDEX IF NOT EXISTS follows_followee_idx ON follows (followee_email)",
    """
    CREATE TABLE IF NOT EXISTS videos (
        id BIGSERIAL PRIMARY KEY,
        owner_email TEXT NOT NULL REFERENCES users (email),
        title TEXT NOT NULL,
        file_ref TEXT NOT NULL UNIQUE,
        views BIGINT NOT NULL DEFAULT 0,
        likes BIGINT NOT NULL DEFAULT 0,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
    """,
    "CREATE INDEX IF NOT EXISTS videos_owner_idx ON videos (owner_email)",
    """
    CREATE TABLE IF NOT EXISTS messages (
        id BIGSERIAL PRIMARY KEY,
        sender_email TEXT NOT NULL,
        receiver_email TEXT NOT NULL,
        content TEXT NOT NULL,
        created_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        read BOOLEAN NOT NULL DEFAULT FALSE
    )
    """,
    """
    CREATE INDEX IF NOT EXISTS messages_pair_idx
        ON messages (sender_email, receiver_email, created_at DESC)
    """,
]


async def apply_schema() -> None:
    """Create missing tables and indexes; existing ones are left untouched."""
    async with db_transaction("apply_schema") as conn:
        for statement in SCHEMA_STATEMENTS:
            await conn.execute(statement)

    logger.info("Database schema ensured", statements=len(SCHEMA_STATEMENTS))
