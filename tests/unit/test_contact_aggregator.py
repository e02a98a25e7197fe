from datetime import UTC, datetime, timedelta
from zoneinfo import ZoneInfo

import pytest

from reelhub.errors import NotFoundError
from reelhub.models.domain.message_domain import ContactSummary
from reelhub.services.contact_service import (
    ContactAggregator,
    format_message_time,
    sort_contacts,
    truncate_preview,
)

ME = "me@example.com"


@pytest.fixture
def aggregator(user_repo, message_repo):
    user_repo.add(ME, "Me")
    return ContactAggregator(users=user_repo, messages=message_repo, tz=ZoneInfo("UTC"))


def test_preview_of_51_chars_is_truncated_with_ellipsis():
    content = "x" * 51
    assert truncate_preview(content) == "x" * 50 + "..."


def test_preview_of_50_chars_is_unchanged():
    content = "y" * 50
    assert truncate_preview(content) == content


def test_format_message_time_uses_display_zone():
    at = datetime(2026, 3, 1, 23, 30, tzinfo=UTC)
    assert format_message_time(at, ZoneInfo("UTC")) == "23:30"
    assert format_message_time(at, ZoneInfo("Asia/Kolkata")) == "05:00"


def test_sort_uses_timestamp_not_formatted_time():
    # 23:59 yesterday is older than 00:01 today even though "23:59" > "00:01"
    late = ContactSummary(
        name="Late", email="late@example.com", profile_pic="/p.png",
        last_message_time="23:59", last_message_at=datetime(2026, 3, 1, 23, 59, tzinfo=UTC),
    )
    early = ContactSummary(
        name="Early", email="early@example.com", profile_pic="/p.png",
        last_message_time="00:01", last_message_at=datetime(2026, 3, 2, 0, 1, tzinfo=UTC),
    )
    assert [c.email for c in sort_contacts([late, early])] == ["early@example.com", "late@example.com"]


def test_contacts_without_messages_sort_last_by_email():
    silent = [
        ContactSummary(name="Zed", email="zed@example.com", profile_pic="/p.png"),
        ContactSummary(name="Amy", email="amy@example.com", profile_pic="/p.png"),
    ]
    talked = ContactSummary(
        name="Bo", email="bo@example.com", profile_pic="/p.png",
        last_message_at=datetime(2020, 1, 1, tzinfo=UTC),
    )
    ordered = sort_contacts(silent + [talked])
    assert [c.email for c in ordered] == ["bo@example.com", "amy@example.com", "zed@example.com"]


@pytest.mark.asyncio
async def test_contacts_sorted_by_recency(aggregator, user_repo, message_repo, clock):
    now = clock.datetime()
    for email in ("c1@example.com", "c2@example.com", "c3@example.com"):
        user_repo.add(email)
        user_repo.follow(ME, email)

    message_repo.add("c1@example.com", ME, "hi", created_at=now - timedelta(minutes=5))
    message_repo.add(ME, "c2@example.com", "hello", created_at=now - timedelta(hours=1))

    contacts = await aggregator.list_chat_contacts(ME)

    assert [c.email for c in contacts] == ["c1@example.com", "c2@example.com", "c3@example.com"]
    assert contacts[2].last_message is None
    assert contacts[2].last_message_time is None


@pytest.mark.asyncio
async def test_union_of_followers_and_following_is_deduplicated(aggregator, user_repo):
    for email in ("mutual@example.com", "fan@example.com", "idol@example.com"):
        user_repo.add(email)
    user_repo.follow(ME, "mutual@example.com")
    user_repo.follow("mutual@example.com", ME)
    user_repo.follow("fan@example.com", ME)
    user_repo.follow(ME, "idol@example.com")

    contacts = await aggregator.list_chat_contacts(ME)

    emails = [c.email for c in contacts]
    assert sorted(emails) == ["fan@example.com", "idol@example.com", "mutual@example.com"]
    assert ME not in emails


@pytest.mark.asyncio
async def test_latest_message_in_either_direction_is_used(aggregator, user_repo, message_repo, clock):
    now = clock.datetime()
    user_repo.add("pal@example.com", "Pal", profile_pic="/pal.png")
    user_repo.follow("pal@example.com", ME)
    message_repo.add(ME, "pal@example.com", "older", created_at=now - timedelta(minutes=10))
    message_repo.add("pal@example.com", ME, "newer " + "z" * 60, created_at=now - timedelta(minutes=1))

    [contact] = await aggregator.list_chat_contacts(ME)

    assert contact.name == "Pal"
    assert contact.profile_pic == "/pal.png"
    assert contact.last_message == ("newer " + "z" * 60)[:50] + "..."
    assert contact.last_message_at == now - timedelta(minutes=1)
    assert contact.last_message_time == (now - timedelta(minutes=1)).strftime("%H:%M")


@pytest.mark.asyncio
async def test_messages_with_strangers_are_ignored(aggregator, user_repo, message_repo):
    user_repo.add("stranger@example.com")
    message_repo.add("stranger@example.com", ME, "hey")

    assert await aggregator.list_chat_contacts(ME) == []


@pytest.mark.asyncio
async def test_unknown_requester_is_not_found(user_repo, message_repo):
    aggregator = ContactAggregator(users=user_repo, messages=message_repo)
    with pytest.raises(NotFoundError):
        await aggregator.list_chat_contacts("nobody@example.com")
