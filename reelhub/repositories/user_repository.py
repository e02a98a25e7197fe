"""
Persistence for users and the follow graph.

Follow edges are rows of `follows`; toggling one runs inside a single
transaction that first locks both user rows, so concurrent toggles on the
same pair serialize instead of interleaving.
"""

from reelhub.db.helpers import (
    db_transaction,
    execute_query,
    fetch_all,
    fetch_one,
    with_db_retry,
)
from reelhub.infrastructure.observability.logging import get_logger
from reelhub.models.domain.user_domain import UserRecord, UserSummary

logger = get_logger(__name__)

USER_COLUMNS = "email, name, password_hash, profile_pic, total_views, total_likes, created_at"


class UserRepository:
    """Postgres-backed user directory."""

    @classmethod
    def _row_to_user(cls, row: dict | None) -> UserRecord | None:
        if not row:
            return None
        return UserRecord(**row)

    @classmethod
    async def get_user(cls, email: str) -> UserRecord | None:
        row = await fetch_one(f"SELECT {USER_COLUMNS} FROM users WHERE email = %s", (email,))
        return cls._row_to_user(row)

    @classmethod
    async def get_users(cls, emails: list[str]) -> dict[str, UserRecord]:
        """Bulk lookup; unknown emails are simply absent from the result."""
        if not emails:
            return {}
        rows = await fetch_all(
            f"SELECT {USER_COLUMNS} FROM users WHERE email = ANY(%s)", (list(emails),)
        )
        return {row["email"]: UserRecord(**row) for row in rows}

    @classmethod
    async def create_user(
        cls, email: str, name: str, password_hash: str | None, profile_pic: str
    ) -> UserRecord | None:
        """Insert a user. Returns None when the email is already registered."""
        query = f"""
            INSERT INTO users (email, name, password_hash, profile_pic)
            VALUES (%s, %s, %s, %s)
            ON CONFLICT (email) DO NOTHING
            RETURNING {USER_COLUMNS}
        """
        row = await fetch_one(query, (email, name, password_hash, profile_pic))
        if row:
            logger.info("User created", email=email, with_password=password_hash is not None)
        return cls._row_to_user(row)

    @classmethod
    async def update_password(cls, email: str, password_hash: str) -> bool:
        affected = await execute_query(
            "UPDATE users SET password_hash = %s WHERE email = %s", (password_hash, email)
        )
        return affected > 0

    @classmethod
    async def update_profile(
        cls, email: str, name: str | None = None, profile_pic: str | None = None
    ) -> UserRecord | None:
        query = f"""
            UPDATE users
            SET name = COALESCE(%s, name),
                profile_pic = COALESCE(%s, profile_pic)
            WHERE email = %s
            RETURNING {USER_COLUMNS}
        """
        row = await fetch_one(query, (name, profile_pic, email))
        return cls._row_to_user(row)

    @classmethod
    async def search(cls, term: str, exclude: str, limit: int = 20) -> list[UserSummary]:
        pattern = f"%{term}%"
        query = """
            SELECT name, email, profile_pic
            FROM users
            WHERE (name ILIKE %s OR email ILIKE %s) AND email <> %s
            ORDER BY name, email
            LIMIT %s
        """
        rows = await fetch_all(query, (pattern, pattern, exclude, limit))
        return [UserSummary(**row) for row in rows]

    @classmethod
    async def list_followers(cls, email: str) -> list[str]:
        rows = await fetch_all(
            "SELECT follower_email FROM follows WHERE followee_email = %s ORDER BY created_at",
            (email,),
        )
        return [row["follower_email"] for row in rows]

    @classmethod
    async def list_following(cls, email: str) -> list[str]:
        rows = await fetch_all(
            "SELECT followee_email FROM follows WHERE follower_email = %s ORDER BY created_at",
            (email,),
        )
        return [row["followee_email"] for row in rows]

    @classmethod
    @with_db_retry(max_retries=3, base_delay=0.1)
    async def toggle_follow(cls, actor: str, target: str) -> str | None:
        """
        Flip the actor -> target edge atomically.

        Returns "follow" or "unfollow", or None when either user is missing
        (nothing is written in that case).
        """
        async with db_transaction("toggle_follow") as conn:
            locked = await fetch_all(
                "SELECT email FROM users WHERE email = ANY(%s) ORDER BY email FOR UPDATE",
                ([actor, target],),
                connection=conn,
            )
            if len(locked) < 2:
                return None

            removed = await execute_query(
                "DELETE FROM follows WHERE follower_email = %s AND followee_email = %s",
                (actor, target),
                connection=conn,
            )
            if removed:
                return "unfollow"

            await execute_query(
                "INSERT INTO follows (follower_email, followee_email) VALUES (%s, %s)",
                (actor, target),
                connection=conn,
            )
            return "follow"
