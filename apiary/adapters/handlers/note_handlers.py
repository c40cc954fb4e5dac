"""
FastAPI handlers for the notes journal.
"""

from fastapi import APIRouter, Response
from typing import List
import logging

from ...core.ports.note_service import NoteService
from ..models import (
    ErrorResponse,
    NoteCreateRequest,
    NoteModel,
    NotePinRequest,
    NoteUpdateRequest
)


class NoteHandlers:
    """FastAPI handlers for note endpoints."""

    def __init__(self, note_service: NoteService):
        self.note_service = note_service
        self.logger = logging.getLogger(__name__)

        self.router = APIRouter(prefix="/api/v1/users/{user_id}/notes", tags=["notes"])
        self._setup_routes()

    def _setup_routes(self):
        """Setup FastAPI routes."""

        @self.router.get("", response_model=List[NoteModel], summary="List Notes")
        async def list_notes(user_id: str):
            notes = await self.note_service.list_notes(user_id)
            return [NoteModel.from_domain(note) for note in notes]

        @self.router.post(
            "",
            response_model=NoteModel,
            status_code=201,
            responses={400: {"model": ErrorResponse}},
            summary="Create Note"
        )
        async def create_note(user_id: str, request: NoteCreateRequest):
            note = await self.note_service.create_note(
                user_id, request.title, request.content, request.hive_id
            )
            return NoteModel.from_domain(note)

        @self.router.patch(
            "/{note_id}",
            response_model=NoteModel,
            responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
            summary="Update Note"
        )
        async def update_note(user_id: str, note_id: str, request: NoteUpdateRequest):
            note = await self.note_service.update_note(
                user_id,
                note_id,
                title=request.title,
                content=request.content,
                hive_id=request.hive_id
            )
            return NoteModel.from_domain(note)

        @self.router.post(
            "/{note_id}/pin",
            response_model=NoteModel,
            responses={404: {"model": ErrorResponse}},
            summary="Pin or Unpin Note"
        )
        async def pin_note(user_id: str, note_id: str, request: NotePinRequest):
            note = await self.note_service.pin_note(user_id, note_id, request.pinned)
            return NoteModel.from_domain(note)

        @self.router.delete(
            "/{note_id}",
            status_code=204,
            responses={404: {"model": ErrorResponse}},
            summary="Delete Note"
        )
        async def delete_note(user_id: str, note_id: str):
            await self.note_service.delete_note(user_id, note_id)
            self.logger.info(f"DELETE note {note_id} for user {user_id}")
            return Response(status_code=204)
