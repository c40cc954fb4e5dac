"""
Unit tests for the Redis hive and note repositories.
"""

import json
import pytest
from datetime import timedelta
from unittest.mock import AsyncMock, MagicMock

from apiary.adapters.repositories.redis_repository import (
    RedisDocumentStore,
    RedisHiveRepository,
    RedisNoteRepository
)
from apiary.core.domain.hive import Hive, Note
from apiary.core.ports.exceptions import RepositoryError


@pytest.fixture
def redis_client():
    """Async Redis client mock backed by a dict of hashes."""
    hashes = {}

    async def hget(key, field):
        return hashes.get(key, {}).get(field)

    async def hgetall(key):
        return dict(hashes.get(key, {}))

    async def hset(key, field, value):
        hashes.setdefault(key, {})[field] = value
        return 1

    async def hdel(key, field):
        return 1 if hashes.get(key, {}).pop(field, None) is not None else 0

    client = MagicMock()
    client.hashes = hashes
    client.ping = AsyncMock(return_value=True)
    client.aclose = AsyncMock()
    client.hget = AsyncMock(side_effect=hget)
    client.hgetall = AsyncMock(side_effect=hgetall)
    client.hset = AsyncMock(side_effect=hset)
    client.hdel = AsyncMock(side_effect=hdel)
    return client


@pytest.fixture
def hive_repository(redis_client, mock_logger):
    return RedisHiveRepository(client=redis_client, logger=mock_logger)


@pytest.fixture
def note_repository(redis_client, mock_logger):
    return RedisNoteRepository(client=redis_client, logger=mock_logger)


class TestRedisDocumentStore:
    """Test cases for the shared connection handling."""

    @pytest.mark.asyncio
    async def test_connect_with_client(self, redis_client, mock_logger):
        store = RedisDocumentStore(client=redis_client, logger=mock_logger)

        assert await store.connect() is True
        redis_client.ping.assert_called_once()

    @pytest.mark.asyncio
    async def test_connect_failure(self, redis_client, mock_logger):
        redis_client.ping = AsyncMock(side_effect=ConnectionError("refused"))
        store = RedisDocumentStore(client=redis_client, logger=mock_logger)

        assert await store.connect() is False
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_disconnect(self, redis_client, mock_logger):
        store = RedisDocumentStore(client=redis_client, logger=mock_logger)

        await store.disconnect()

        redis_client.aclose.assert_called_once()
        assert await store.health_check() is False

    @pytest.mark.asyncio
    async def test_operations_without_connection(self, mock_logger):
        repository = RedisHiveRepository(logger=mock_logger)

        with pytest.raises(RepositoryError, match="Redis connection not available"):
            await repository.list_hives("user-001")

    @pytest.mark.asyncio
    async def test_redis_errors_wrapped(self, redis_client, hive_repository):
        redis_client.hgetall = AsyncMock(side_effect=TimeoutError("timed out"))

        with pytest.raises(RepositoryError) as exc_info:
            await hive_repository.list_hives("user-001")

        assert exc_info.value.details == "timed out"

    def test_user_key(self, mock_logger):
        store = RedisDocumentStore(key_prefix="test", logger=mock_logger)

        assert store.user_key("user-001", "notes") == "test:users:user-001:notes"
        assert store.url == "redis://localhost:6379/0"


class TestRedisHiveRepository:
    """Test cases for hive documents."""

    @pytest.mark.asyncio
    async def test_create_and_get_hive(self, hive_repository, redis_client, sample_hive, sample_measurements):
        sample_hive.latest_stats = sample_measurements[-1]

        await hive_repository.create_hive(sample_hive)
        stored = await hive_repository.get_hive("user-001", "hive-001")

        assert stored.name == "Meadow Hive"
        assert stored.system_id == "system-001"
        assert stored.created_at == sample_hive.created_at
        assert stored.latest_stats is None

        document = json.loads(redis_client.hashes["apiary:users:user-001:hives"]["hive-001"])
        assert "latest_stats" not in document

    @pytest.mark.asyncio
    async def test_get_missing_hive(self, hive_repository):
        assert await hive_repository.get_hive("user-001", "missing") is None

    @pytest.mark.asyncio
    async def test_hives_are_scoped_per_user(self, hive_repository, sample_hive):
        await hive_repository.create_hive(sample_hive)

        assert await hive_repository.list_hives("user-002") == []
        assert await hive_repository.get_hive("user-002", "hive-001") is None

    @pytest.mark.asyncio
    async def test_list_hives_oldest_first(self, hive_repository, sample_hive):
        newer = Hive(
            id="hive-002",
            user_id="user-001",
            name="Garden Hive",
            created_at=sample_hive.created_at + timedelta(days=1)
        )
        await hive_repository.create_hive(newer)
        await hive_repository.create_hive(sample_hive)

        hives = await hive_repository.list_hives("user-001")

        assert [h.id for h in hives] == ["hive-001", "hive-002"]


class TestRedisNoteRepository:
    """Test cases for note documents."""

    @pytest.mark.asyncio
    async def test_create_and_list_notes(self, note_repository, sample_notes):
        for note in sample_notes:
            await note_repository.create_note(note)

        notes = await note_repository.list_notes("user-001")

        assert {n.id for n in notes} == {n.id for n in sample_notes}
        stored = next(n for n in notes if n.id == "note-hive-pinned")
        assert stored.pinned is True
        assert stored.hive_id == "hive-001"
        assert stored.date == sample_notes[3].date

    @pytest.mark.asyncio
    async def test_update_note(self, note_repository, sample_notes):
        await note_repository.create_note(sample_notes[0])

        updated = await note_repository.update_note(
            "user-001", "note-hive-old", {"pinned": True, "hive_id": None}
        )

        assert updated.pinned is True
        assert updated.hive_id is None
        assert updated.title == "Queen spotted"
        assert (await note_repository.get_note("user-001", "note-hive-old")).pinned is True

    @pytest.mark.asyncio
    async def test_update_missing_note(self, note_repository):
        assert await note_repository.update_note("user-001", "missing", {"title": "x"}) is None

    @pytest.mark.asyncio
    async def test_update_rejects_unknown_fields(self, note_repository):
        with pytest.raises(ValueError, match="Fields cannot be updated: date"):
            await note_repository.update_note("user-001", "note-1", {"date": "2024-01-01"})

    @pytest.mark.asyncio
    async def test_delete_note(self, note_repository, sample_notes):
        await note_repository.create_note(sample_notes[1])

        assert await note_repository.delete_note("user-001", "note-general-new") is True
        assert await note_repository.delete_note("user-001", "note-general-new") is False
        assert await note_repository.get_note("user-001", "note-general-new") is None
