"""
Append-only message log between two identities.
"""

from reelhub.db.helpers import execute_query, fetch_all, fetch_one
from reelhub.models.domain.message_domain import Message

MESSAGE_COLUMNS = """
    id, sender_email AS sender, receiver_email AS receiver, content, created_at, read
"""

PAIR_FILTER = """
    (sender_email = %s AND receiver_email = %s)
    OR (sender_email = %s AND receiver_email = %s)
"""


class MessageRepository:
    """Postgres-backed message store."""

    @classmethod
    async def insert(cls, sender: str, receiver: str, content: str) -> Message:
        query = f"""
            INSERT INTO messages (sender_email, receiver_email, content)
            VALUES (%s, %s, %s)
            RETURNING {MESSAGE_COLUMNS}
        """
        row = await fetch_one(query, (sender, receiver, content))
        return Message(**row)

    @classmethod
    async def latest_between(cls, a: str, b: str) -> Message | None:
        query = f"""
            SELECT {MESSAGE_COLUMNS}
            FROM messages
            WHERE {PAIR_FILTER}
            ORDER BY created_at DESC, id DESC
            LIMIT 1
        """
        row = await fetch_one(query, (a, b, b, a))
        return Message(**row) if row else None

    @classmethod
    async def conversation(cls, a: str, b: str, limit: int) -> list[Message]:
        """Most recent `limit` messages of the pair, oldest first."""
        query = f"""
            SELECT * FROM (
                SELECT {MESSAGE_COLUMNS}
                FROM messages
                WHERE {PAIR_FILTER}
                ORDER BY created_at DESC, id DESC
                LIMIT %s
            ) AS recent
            ORDER BY created_at ASC, id ASC
        """
        rows = await fetch_all(query, (a, b, b, a, limit))
        return [Message(**row) for row in rows]

    @classmethod
    async def mark_read(cls, sender: str, receiver: str) -> int:
        """Mark everything `sender` sent to `receiver` as read."""
        return await execute_query(
            """
            UPDATE messages SET read = TRUE
            WHERE sender_email = %s AND receiver_email = %s AND read = FALSE
            """,
            (sender, receiver),
        )
