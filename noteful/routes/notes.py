"""
Noteful API — Notes Route Handlers
==================================

What:  CRUD endpoints for the authenticated user's notes.
How:   Extracts path/query/body input, delegates to NoteService, sets the
       status code and Location header.
Who:   Any client holding a bearer token.

Every handler resolves `current_user` first; NoteService receives the
user's id and applies it as the filter of every query.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from noteful.database import get_db_session, get_session_factory
from noteful.schemas.common import ErrorResponse
from noteful.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from noteful.schemas.user import TokenUser
from noteful.security import get_current_user
from noteful.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/api/notes",
    tags=["Notes"],
    dependencies=[Depends(get_current_user)],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)

_NOT_FOUND = {"description": "Note not found", "model": ErrorResponse}
_BAD_REQUEST = {"description": "Invalid input", "model": ErrorResponse}


@router.get(
    "",
    response_model=List[NoteResponse],
    responses={400: _BAD_REQUEST},
    summary="List notes",
    description=(
        "Returns the user's notes, most recently updated first. Optionally "
        "filtered by a case-insensitive search term, a folder, or a tag."
    ),
)
async def list_notes(
    search_term: Optional[str] = Query(default=None, alias="searchTerm"),
    folder_id: Optional[str] = Query(default=None, alias="folderId"),
    tag_id: Optional[str] = Query(default=None, alias="tagId"),
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_notes(
        db=db,
        user_id=current_user.id,
        search_term=search_term,
        folder_id=folder_id,
        tag_id=tag_id,
    )


@router.get(
    "/{note_id}",
    response_model=NoteResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND},
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.get_note(db=db, user_id=current_user.id, note_id=note_id)


@router.post(
    "",
    status_code=201,
    response_model=NoteResponse,
    responses={400: _BAD_REQUEST},
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    response: Response,
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> NoteResponse:
    note = await note_service.create_note(
        db=db,
        session_factory=session_factory,
        user_id=current_user.id,
        payload=payload,
    )
    response.headers["Location"] = f"{router.prefix}/{note.id}"
    return note


@router.put(
    "/{note_id}",
    response_model=NoteResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND},
    summary="Update a note",
    description="Only the fields present in the body are changed.",
)
async def update_note(
    note_id: str,
    payload: NoteUpdate,
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
    session_factory: async_sessionmaker = Depends(get_session_factory),
) -> NoteResponse:
    return await note_service.update_note(
        db=db,
        session_factory=session_factory,
        user_id=current_user.id,
        note_id=note_id,
        payload=payload,
    )


@router.delete(
    "/{note_id}",
    status_code=204,
    response_class=Response,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND},
    summary="Delete a note",
)
async def delete_note(
    note_id: str,
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db=db, user_id=current_user.id, note_id=note_id)
    return Response(status_code=204)
