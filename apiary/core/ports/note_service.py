from abc import ABC, abstractmethod
from typing import List, Optional

from ..domain.hive import Note


class NoteService(ABC):
    """Port (interface) for the beekeeping notes journal."""

    @abstractmethod
    async def list_notes(self, user_id: str) -> List[Note]:
        """
        List notes in display order: general notes before hive notes,
        pinned before unpinned, newest first.
        """
        pass

    @abstractmethod
    async def create_note(
        self,
        user_id: str,
        title: str,
        content: str,
        hive_id: Optional[str] = None
    ) -> Note:
        """
        Create a note dated now.

        Raises:
            ValidationError: If the title is blank
        """
        pass

    @abstractmethod
    async def update_note(
        self,
        user_id: str,
        note_id: str,
        title: Optional[str] = None,
        content: Optional[str] = None,
        hive_id: Optional[str] = None
    ) -> Note:
        """
        Change the given fields of a note; None leaves a field untouched.

        Raises:
            NoteNotFoundError: If the note does not exist
        """
        pass

    @abstractmethod
    async def pin_note(self, user_id: str, note_id: str, pinned: bool) -> Note:
        """
        Pin or unpin a note.

        Raises:
            NoteNotFoundError: If the note does not exist
        """
        pass

    @abstractmethod
    async def delete_note(self, user_id: str, note_id: str) -> None:
        """
        Delete a note.

        Raises:
            NoteNotFoundError: If the note does not exist
        """
        pass
