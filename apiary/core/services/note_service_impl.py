"""
Implementation of the NoteService port.
"""

import logging
import uuid
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from ..domain.hive import Note
from ..ports.exceptions import NoteNotFoundError, ValidationError
from ..ports.note_repository import NoteRepository
from ..ports.note_service import NoteService
from .hive_statistics_view_model import utc_now


def note_display_key(note: Note):
    """Sort key: general notes first, then pinned, then newest."""
    return (note.is_hive_note, not note.pinned, -note.date.timestamp())


class NoteServiceImpl(NoteService):
    """Concrete implementation of the NoteService port."""

    def __init__(self, note_repository: NoteRepository, clock: Optional[Callable[[], datetime]] = None):
        self.note_repository = note_repository
        self.clock = clock or utc_now
        self.logger = logging.getLogger(__name__)

    async def list_notes(self, user_id: str) -> List[Note]:
        notes = await self.note_repository.list_notes(user_id)
        return sorted(notes, key=note_display_key)

    async def create_note(
        self,
        user_id: str,
        title: str,
        content: str,
        hive_id: Optional[str] = None
    ) -> Note:
        if not title or not title.strip():
            raise ValidationError("Note title cannot be empty")

        note = Note(
            id=uuid.uuid4().hex,
            user_id=user_id,
            title=title.strip(),
            content=content or "",
            hive_id=hive_id or None,
            pinned=False,
            date=self.clock()
        )
        stored = await self.note_repository.create_note(note)
        self.logger.info(f"Created note {stored.id} for user {user_id}")
        return stored

    async def update_note(
        self,
        user_id: str,
        note_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
        hive_id: Optional[str] = None
    ) -> Note:
        changes: Dict[str, Any] = {}
        if title is not None:
            if not title.strip():
                raise ValidationError("Note title cannot be empty")
            changes["title"] = title.strip()
        if content is not None:
            changes["content"] = content
        if hive_id is not None:
            # an empty hive id unlinks the note
            changes["hive_id"] = hive_id or None

        return await self._apply(user_id, note_id, changes)

    async def pin_note(self, user_id: str, note_id: str, pinned: bool) -> Note:
        return await self._apply(user_id, note_id, {"pinned": bool(pinned)})

    async def delete_note(self, user_id: str, note_id: str) -> None:
        deleted = await self.note_repository.delete_note(user_id, note_id)
        if not deleted:
            raise NoteNotFoundError(user_id, note_id)
        self.logger.info(f"Deleted note {note_id} for user {user_id}")

    async def _apply(self, user_id: str, note_id: str, changes: Dict[str, Any]) -> Note:
        if not changes:
            note = await self.note_repository.get_note(user_id, note_id)
        else:
            note = await self.note_repository.update_note(user_id, note_id, changes)

        if note is None:
            raise NoteNotFoundError(user_id, note_id)
        return note
