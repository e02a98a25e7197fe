import asyncio
import os
from datetime import UTC, datetime

os.environ.setdefault("JWT_SECRET", "test-secret-with-enough-length-0123456789")
os.environ.setdefault("DB_AUTO_CREATE_SCHEMA", "false")

import pytest  # noqa: E402

from reelhub.models.domain.message_domain import Message  # noqa: E402
from reelhub.models.domain.user_domain import (  # noqa: E402
    FeedItem,
    UserRecord,
    UserSummary,
    VideoPost,
)
from reelhub.services.otp_store import OtpPurpose, OtpStore  # noqa: E402

START = datetime(2026, 3, 1, 12, 0, tzinfo=UTC).timestamp()


class FakeClock:
    def __init__(self, now: float = START):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def datetime(self) -> datetime:
        return datetime.fromtimestamp(self.now, UTC)


class FakeRedis:
    def __init__(self):
        self.store: dict[str, str] = {}
        self.ttls: dict[str, int | None] = {}
        self.fail_writes = False

    async def set_with_ttl(self, key: str, value: str, ttl_s: int | None = None) -> bool:
        if self.fail_writes:
            return False
        self.store[key] = value
        self.ttls[key] = ttl_s
        return True

    async def get(self, key: str) -> str | None:
        return self.store.get(key)

    async def delete(self, key: str) -> bool:
        return self.store.pop(key, None) is not None

    async def ping(self) -> bool:
        return True


class FakeMailer:
    def __init__(self):
        self.sent: list[tuple[str, str, str]] = []
        self.error: Exception | None = None

    async def send(self, to: str, subject: str, body: str) -> None:
        if self.error:
            raise self.error
        self.sent.append((to, subject, body))


class InMemoryUserRepository:
    """Same surface as UserRepository, backed by dicts."""

    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.users: dict[str, UserRecord] = {}
        # (follower, followee) in insertion order
        self.follows: list[tuple[str, str]] = []

    def add(self, email: str, name: str | None = None, password_hash: str | None = None, **extra):
        user = UserRecord(
            email=email,
            name=name or email.split("@")[0],
            password_hash=password_hash,
            profile_pic=extra.pop("profile_pic", "/default.png"),
            created_at=self.clock.datetime(),
            **extra,
        )
        self.users[email] = user
        return user

    def follow(self, follower: str, followee: str) -> None:
        self.follows.append((follower, followee))

    async def get_user(self, email: str) -> UserRecord | None:
        return self.users.get(email)

    async def get_users(self, emails: list[str]) -> dict[str, UserRecord]:
        return {email: self.users[email] for email in emails if email in self.users}

    async def create_user(self, email, name, password_hash, profile_pic):
        if email in self.users:
            return None
        return self.add(email, name, password_hash, profile_pic=profile_pic)

    async def update_password(self, email: str, password_hash: str) -> bool:
        user = self.users.get(email)
        if not user:
            return False
        self.users[email] = user.model_copy(update={"password_hash": password_hash})
        return True

    async def update_profile(self, email, name=None, profile_pic=None):
        user = self.users.get(email)
        if not user:
            return None
        changes = {k: v for k, v in {"name": name, "profile_pic": profile_pic}.items() if v is not None}
        self.users[email] = user.model_copy(update=changes)
        return self.users[email]

    async def search(self, term: str, exclude: str, limit: int = 20) -> list[UserSummary]:
        needle = term.lower()
        hits = [
            u
            for u in sorted(self.users.values(), key=lambda u: (u.name, u.email))
            if u.email != exclude and (needle in u.name.lower() or needle in u.email.lower())
        ]
        return [UserSummary(name=u.name, email=u.email, profile_pic=u.profile_pic) for u in hits[:limit]]

    async def list_followers(self, email: str) -> list[str]:
        return [follower for follower, followee in self.follows if followee == email]

    async def list_following(self, email: str) -> list[str]:
        return [followee for follower, followee in self.follows if follower == email]

    async def toggle_follow(self, actor: str, target: str) -> str | None:
        if actor not in self.users or target not in self.users:
            return None
        edge = (actor, target)
        if edge in self.follows:
            self.follows.remove(edge)
            return "unfollow"
        self.follows.append(edge)
        return "follow"


class InMemoryMessageRepository:
    def __init__(self, clock: FakeClock):
        self.clock = clock
        self.messages: list[Message] = []

    def add(self, sender: str, receiver: str, content: str, created_at: datetime | None = None, read=False):
        message = Message(
            id=len(self.messages) + 1,
            sender=sender,
            receiver=receiver,
            content=content,
            created_at=created_at or self.clock.datetime(),
            read=read,
        )
        self.messages.append(message)
        return message

    def _pair(self, a: str, b: str) -> list[Message]:
        return sorted(
            (m for m in self.messages if (m.sender, m.receiver) in {(a, b), (b, a)}),
            key=lambda m: (m.created_at, m.id),
        )

    async def insert(self, sender: str, receiver: str, content: str) -> Message:
        return self.add(sender, receiver, content)

    async def latest_between(self, a: str, b: str) -> Message | None:
        pair = self._pair(a, b)
        return pair[-1] if pair else None

    async def conversation(self, a: str, b: str, limit: int) -> list[Message]:
        # copies, so later mark_read does not show through
        return [m.model_copy() for m in self._pair(a, b)[-limit:]]

    async def mark_read(self, sender: str, receiver: str) -> int:
        marked = 0
        for i, m in enumerate(self.messages):
            if m.sender == sender and m.receiver == receiver and not m.read:
                self.messages[i] = m.model_copy(update={"read": True})
                marked += 1
        return marked


class InMemoryVideoRepository:
    def __init__(self, users: InMemoryUserRepository, clock: FakeClock):
        self.users = users
        self.clock = clock
        self.videos: list[VideoPost] = []

    async def add(self, owner_email: str, title: str, file_ref: str) -> VideoPost | None:
        if any(v.file_ref == file_ref for v in self.videos):
            return None
        post = VideoPost(
            id=len(self.videos) + 1,
            owner_email=owner_email,
            title=title,
            file_ref=file_ref,
            created_at=self.clock.datetime(),
        )
        self.videos.append(post)
        return post

    async def list_for_owner(self, owner_email: str) -> list[VideoPost]:
        return [v for v in self.videos if v.owner_email == owner_email]

    async def list_feed(self) -> list[FeedItem]:
        items = []
        for v in sorted(self.videos, key=lambda v: (v.created_at, v.id), reverse=True):
            owner = self.users.users[v.owner_email]
            items.append(FeedItem(**v.model_dump(), name=owner.name, profile_pic=owner.profile_pic))
        return items

    async def increment(self, file_ref: str, counter: str) -> VideoPost | None:
        # yield first so concurrent callers interleave
        await asyncio.sleep(0)
        for i, v in enumerate(self.videos):
            if v.file_ref == file_ref:
                self.videos[i] = v.model_copy(update={counter: getattr(v, counter) + 1})
                owner = self.users.users[v.owner_email]
                aggregate = "total_likes" if counter == "likes" else "total_views"
                self.users.users[v.owner_email] = owner.model_copy(
                    update={aggregate: getattr(owner, aggregate) + 1}
                )
                return self.videos[i]
        return None


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def fake_mailer():
    return FakeMailer()


@pytest.fixture
def user_repo(clock):
    return InMemoryUserRepository(clock)


@pytest.fixture
def message_repo(clock):
    return InMemoryMessageRepository(clock)


@pytest.fixture
def video_repo(user_repo, clock):
    return InMemoryVideoRepository(user_repo, clock)


@pytest.fixture
def otp_store(fake_redis, clock):
    return OtpStore(
        backend=fake_redis,
        clock=clock,
        windows={OtpPurpose.LOGIN: 120, OtpPurpose.RESET: 600},
        grace_seconds=60,
    )
