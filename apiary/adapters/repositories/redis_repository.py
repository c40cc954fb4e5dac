"""
Redis document store for hives and notes.
Each user owns one Redis hash per collection; hash fields are document ids and
values are JSON documents.
"""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

import redis.asyncio as redis

from ...core.domain.hive import Hive, Note
from ...core.ports.exceptions import RepositoryError
from ...core.ports.hive_repository import HiveRepository
from ...core.ports.logger import Logger
from ...core.ports.note_repository import NoteRepository
from ..logger.standard_logger import StandardLogger


class RedisDocumentStore:
    """Connection handling shared by the Redis repositories."""

    def __init__(
        self,
        host: str = "localhost",
        port: int = 6379,
        password: Optional[str] = None,
        db: int = 0,
        key_prefix: str = "apiary",
        client: Optional[redis.Redis] = None,
        logger: Optional[Logger] = None
    ):
        """
        Args:
            host: Redis server host
            port: Redis server port
            password: Redis password (optional)
            db: Redis database number
            key_prefix: Namespace of every key written by the store
            client: Already configured client, used instead of connecting
            logger: Logger instance
        """
        self.host = host
        self.port = port
        self.password = password
        self.db = db
        self.key_prefix = key_prefix
        self.logger = logger or StandardLogger(__name__)
        self._redis: Optional[redis.Redis] = client

    @property
    def url(self) -> str:
        return f"redis://{self.host}:{self.port}/{self.db}"

    async def connect(self) -> bool:
        """
        Establish connection to Redis server.

        Returns:
            True if connection successful, False otherwise
        """
        try:
            if self._redis is None:
                self._redis = redis.Redis(
                    host=self.host,
                    port=self.port,
                    db=self.db,
                    password=self.password,
                    decode_responses=True,
                    socket_connect_timeout=5,
                    socket_timeout=5,
                    retry_on_timeout=True,
                    health_check_interval=30
                )

            await self._redis.ping()
            self.logger.info(f"Connected to Redis at {self.host}:{self.port}")
            return True

        except Exception as e:
            self.logger.error(f"Failed to connect to Redis: {str(e)}")
            return False

    async def disconnect(self):
        """Close Redis connection."""
        if self._redis:
            await self._redis.aclose()
            self._redis = None
            self.logger.info("Disconnected from Redis")

    async def health_check(self) -> bool:
        try:
            return bool(await self._client().ping())
        except Exception as e:
            self.logger.warn(f"Redis health check failed: {e}")
            return False

    def user_key(self, user_id: str, collection: str) -> str:
        return f"{self.key_prefix}:users:{user_id}:{collection}"

    def _client(self) -> redis.Redis:
        if self._redis is None:
            raise RepositoryError("Redis connection not available")
        return self._redis

    async def _get_document(self, key: str, document_id: str) -> Optional[Dict[str, Any]]:
        try:
            raw = await self._client().hget(key, document_id)
        except RepositoryError:
            raise
        except Exception as e:
            self.logger.error(f"Redis HGET error for key {key}: {str(e)}")
            raise RepositoryError(f"Failed to read document {document_id}", e)
        return json.loads(raw) if raw is not None else None

    async def _all_documents(self, key: str) -> List[Dict[str, Any]]:
        try:
            raw_documents = await self._client().hgetall(key)
        except RepositoryError:
            raise
        except Exception as e:
            self.logger.error(f"Redis HGETALL error for key {key}: {str(e)}")
            raise RepositoryError("Failed to read documents", e)
        return [json.loads(raw) for raw in raw_documents.values()]

    async def _put_document(self, key: str, document_id: str, document: Dict[str, Any]) -> None:
        try:
            await self._client().hset(key, document_id, json.dumps(document, separators=(',', ':')))
        except RepositoryError:
            raise
        except Exception as e:
            self.logger.error(f"Redis HSET error for key {key}: {str(e)}")
            raise RepositoryError(f"Failed to write document {document_id}", e)

    async def _delete_document(self, key: str, document_id: str) -> bool:
        try:
            return bool(await self._client().hdel(key, document_id))
        except RepositoryError:
            raise
        except Exception as e:
            self.logger.error(f"Redis HDEL error for key {key}: {str(e)}")
            raise RepositoryError(f"Failed to delete document {document_id}", e)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value else None


def _parse_iso(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


class RedisHiveRepository(RedisDocumentStore, HiveRepository):
    """Hive documents stored under `{prefix}:users:{user_id}:hives`."""

    COLLECTION = "hives"

    async def list_hives(self, user_id: str) -> List[Hive]:
        documents = await self._all_documents(self.user_key(user_id, self.COLLECTION))
        hives = [self._to_hive(document) for document in documents]
        hives.sort(key=lambda hive: hive.created_at)
        return hives

    async def get_hive(self, user_id: str, hive_id: str) -> Optional[Hive]:
        document = await self._get_document(self.user_key(user_id, self.COLLECTION), hive_id)
        return self._to_hive(document) if document else None

    async def create_hive(self, hive: Hive) -> Hive:
        await self._put_document(
            self.user_key(hive.user_id, self.COLLECTION), hive.id, self._to_document(hive)
        )
        return hive

    @staticmethod
    def _to_document(hive: Hive) -> Dict[str, Any]:
        # latest_stats is derived from the measurement store, never persisted
        return {
            "id": hive.id,
            "user_id": hive.user_id,
            "name": hive.name,
            "system_id": hive.system_id,
            "location": hive.location,
            "created_at": _iso(hive.created_at)
        }

    @staticmethod
    def _to_hive(document: Dict[str, Any]) -> Hive:
        return Hive(
            id=document["id"],
            user_id=document["user_id"],
            name=document["name"],
            system_id=document.get("system_id"),
            location=document.get("location"),
            created_at=_parse_iso(document.get("created_at"))
        )


class RedisNoteRepository(RedisDocumentStore, NoteRepository):
    """Note documents stored under `{prefix}:users:{user_id}:notes`."""

    COLLECTION = "notes"
    UPDATABLE_FIELDS = {"title", "content", "hive_id", "pinned"}

    async def list_notes(self, user_id: str) -> List[Note]:
        documents = await self._all_documents(self.user_key(user_id, self.COLLECTION))
        return [self._to_note(document) for document in documents]

    async def get_note(self, user_id: str, note_id: str) -> Optional[Note]:
        document = await self._get_document(self.user_key(user_id, self.COLLECTION), note_id)
        return self._to_note(document) if document else None

    async def create_note(self, note: Note) -> Note:
        await self._put_document(
            self.user_key(note.user_id, self.COLLECTION), note.id, self._to_document(note)
        )
        return note

    async def update_note(self, user_id: str, note_id: str, changes: Dict[str, Any]) -> Optional[Note]:
        unknown = set(changes) - self.UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        key = self.user_key(user_id, self.COLLECTION)
        document = await self._get_document(key, note_id)
        if document is None:
            return None

        document.update(changes)
        await self._put_document(key, note_id, document)
        return self._to_note(document)

    async def delete_note(self, user_id: str, note_id: str) -> bool:
        return await self._delete_document(self.user_key(user_id, self.COLLECTION), note_id)

    @staticmethod
    def _to_document(note: Note) -> Dict[str, Any]:
        return {
            "id": note.id,
            "user_id": note.user_id,
            "title": note.title,
            "content": note.content,
            "hive_id": note.hive_id,
            "pinned": note.pinned,
            "date": _iso(note.date)
        }

    @staticmethod
    def _to_note(document: Dict[str, Any]) -> Note:
        return Note(
            id=document["id"],
            user_id=document["user_id"],
            title=document["title"],
            content=document.get("content", ""),
            hive_id=document.get("hive_id"),
            pinned=bool(document.get("pinned", False)),
            date=_parse_iso(document.get("date"))
        )
