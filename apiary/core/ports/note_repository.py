from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..domain.hive import Note


class NoteRepository(ABC):
    """Port (interface) for the notes journal of a user."""

    @abstractmethod
    async def list_notes(self, user_id: str) -> List[Note]:
        """Fetch all notes of a user, in no particular order."""
        pass

    @abstractmethod
    async def get_note(self, user_id: str, note_id: str) -> Optional[Note]:
        """Fetch one note, None when it does not exist."""
        pass

    @abstractmethod
    async def create_note(self, note: Note) -> Note:
        """Persist a new note."""
        pass

    @abstractmethod
    async def update_note(self, user_id: str, note_id: str, changes: Dict[str, Any]) -> Optional[Note]:
        """
        Apply a partial update to a note.

        Args:
            user_id: Owner of the note
            note_id: Note to update
            changes: Field name to new value

        Returns:
            The updated note, None when it does not exist
        """
        pass

    @abstractmethod
    async def delete_note(self, user_id: str, note_id: str) -> bool:
        """
        Delete a note.

        Returns:
            True if the note was deleted, False if it did not exist
        """
        pass
