from contextlib import asynccontextmanager
from datetime import UTC, datetime
from unittest.mock import AsyncMock

import pytest

from reelhub.repositories.message_repository import MessageRepository
from reelhub.repositories.user_repository import UserRepository
from reelhub.repositories.video_repository import VideoRepository

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)
TX_CONN = object()


def _video_row(**overrides):
    row = {
        "id": 1,
        "owner_email": "maker@example.com",
        "title": "t",
        "file_ref": "clip.mp4",
        "views": 0,
        "likes": 0,
        "created_at": NOW,
    }
    row.update(overrides)
    return row


def _message_row(message_id, sender, receiver, minute):
    return {
        "id": message_id,
        "sender": sender,
        "receiver": receiver,
        "content": f"m{message_id}",
        "created_at": NOW.replace(minute=minute),
        "read": False,
    }


@pytest.fixture
def tx(monkeypatch):
    """Replace the transaction helper with one yielding TX_CONN."""
    opened = []

    @asynccontextmanager
    async def fake_transaction(operation="transaction"):
        opened.append(operation)
        yield TX_CONN

    monkeypatch.setattr("reelhub.repositories.user_repository.db_transaction", fake_transaction)
    return opened


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "counter, aggregate", [("likes", "total_likes"), ("views", "total_views")]
)
async def test_increment_is_one_in_place_statement(monkeypatch, counter, aggregate):
    fetch_mock = AsyncMock(return_value=_video_row(**{counter: 7}))
    monkeypatch.setattr("reelhub.repositories.video_repository.fetch_one", fetch_mock)

    post = await VideoRepository.increment("clip.mp4", counter)

    assert getattr(post, counter) == 7
    fetch_mock.assert_awaited_once()
    query, params = fetch_mock.await_args.args
    normalized = " ".join(query.split())
    assert f"UPDATE videos SET {counter} = {counter} + 1" in normalized
    assert f"UPDATE users SET {aggregate} = {aggregate} + 1" in normalized
    assert params == ("clip.mp4",)


@pytest.mark.asyncio
async def test_increment_unknown_file_returns_none(monkeypatch):
    monkeypatch.setattr(
        "reelhub.repositories.video_repository.fetch_one", AsyncMock(return_value=None)
    )

    assert await VideoRepository.increment("missing.mp4", "likes") is None


@pytest.mark.asyncio
async def test_increment_rejects_unknown_counter(monkeypatch):
    fetch_mock = AsyncMock()
    monkeypatch.setattr("reelhub.repositories.video_repository.fetch_one", fetch_mock)

    with pytest.raises(ValueError):
        await VideoRepository.increment("clip.mp4", "shares")
    fetch_mock.assert_not_awaited()


@pytest.mark.asyncio
async def test_toggle_follow_inserts_edge_on_transaction_connection(monkeypatch, tx):
    fetch_mock = AsyncMock(return_value=[{"email": "a@example.com"}, {"email": "b@example.com"}])
    execute_mock = AsyncMock(side_effect=[0, 1])
    monkeypatch.setattr("reelhub.repositories.user_repository.fetch_all", fetch_mock)
    monkeypatch.setattr("reelhub.repositories.user_repository.execute_query", execute_mock)

    action = await UserRepository.toggle_follow("b@example.com", "a@example.com")

    assert action == "follow"
    assert tx == ["toggle_follow"]

    lock_query = fetch_mock.await_args.args[0]
    assert "ORDER BY email FOR UPDATE" in lock_query
    assert fetch_mock.await_args.kwargs["connection"] is TX_CONN

    delete_call, insert_call = execute_mock.await_args_list
    assert delete_call.args[0].startswith("DELETE FROM follows")
    assert insert_call.args[0].startswith("INSERT INTO follows")
    assert insert_call.args[1] == ("b@example.com", "a@example.com")
    assert all(c.kwargs["connection"] is TX_CONN for c in execute_mock.await_args_list)


@pytest.mark.asyncio
async def test_toggle_follow_removes_existing_edge(monkeypatch, tx):
    monkeypatch.setattr(
        "reelhub.repositories.user_repository.fetch_all",
        AsyncMock(return_value=[{"email": "a@example.com"}, {"email": "b@example.com"}]),
    )
    execute_mock = AsyncMock(return_value=1)
    monkeypatch.setattr("reelhub.repositories.user_repository.execute_query", execute_mock)

    assert await UserRepository.toggle_follow("a@example.com", "b@example.com") == "unfollow"
    execute_mock.assert_awaited_once()


@pytest.mark.asyncio
async def test_toggle_follow_with_missing_user_writes_nothing(monkeypatch, tx):
    monkeypatch.setattr(
        "reelhub.repositories.user_repository.fetch_all",
        AsyncMock(return_value=[{"email": "a@example.com"}]),
    )
    execute_mock = AsyncMock()
    monkeypatch.setattr("reelhub.repositories.user_repository.execute_query", execute_mock)

    assert await UserRepository.toggle_follow("a@example.com", "ghost@example.com") is None
    execute_mock.assert_not_awaited()


@pytest.mark.asyncio
async def test_conversation_passes_limit_and_keeps_ascending_order(monkeypatch):
    rows = [
        _message_row(3, "a@example.com", "b@example.com", 1),
        _message_row(4, "b@example.com", "a@example.com", 2),
    ]
    fetch_mock = AsyncMock(return_value=rows)
    monkeypatch.setattr("reelhub.repositories.message_repository.fetch_all", fetch_mock)

    messages = await MessageRepository.conversation("a@example.com", "b@example.com", 2)

    assert [m.id for m in messages] == [3, 4]
    query, params = fetch_mock.await_args.args
    normalized = " ".join(query.split())
    assert "ORDER BY created_at DESC, id DESC LIMIT %s" in normalized
    assert normalized.endswith("ORDER BY created_at ASC, id ASC")
    assert params == ("a@example.com", "b@example.com", "b@example.com", "a@example.com", 2)


@pytest.mark.asyncio
async def test_latest_between_covers_both_directions(monkeypatch):
    fetch_mock = AsyncMock(return_value=_message_row(9, "b@example.com", "a@example.com", 5))
    monkeypatch.setattr("reelhub.repositories.message_repository.fetch_one", fetch_mock)

    latest = await MessageRepository.latest_between("a@example.com", "b@example.com")

    assert latest.sender == "b@example.com"
    query, params = fetch_mock.await_args.args
    assert "LIMIT 1" in query
    assert params == ("a@example.com", "b@example.com", "b@example.com", "a@example.com")


@pytest.mark.asyncio
async def test_mark_read_targets_one_direction(monkeypatch):
    execute_mock = AsyncMock(return_value=3)
    monkeypatch.setattr("reelhub.repositories.message_repository.execute_query", execute_mock)

    assert await MessageRepository.mark_read("b@example.com", "a@example.com") == 3
    query, params = execute_mock.await_args.args
    assert "SET read = TRUE" in query
    assert params == ("b@example.com", "a@example.com")
