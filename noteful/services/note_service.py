"""
Noteful API — Note Service
==========================

What:  CRUD for notes, always scoped to the authenticated user.
Who:   Called by the /api/notes route handlers.

Write Flow (POST / PUT):
    ┌──────────┐    ┌──────────────┐    ┌────────────────────┐    ┌──────────┐
    │  Body    │───▶│  Shape       │───▶│  Ownership checks  │───▶│  Store   │
    │  (Route) │    │  checks      │    │  folder ∥ tags     │    │  (DB)    │
    └──────────┘    │  (sync, 400) │    │  (async, 400)      │    └──────────┘
                    └──────────────┘    └────────────────────┘

    Shape checks, in order:
        title present and non-empty   → "Missing `title` in request body"
        title is a string             → "Incorrect field type: title must be string"
        content is a string or null   → "Incorrect field type: content must be string"
        folderId parses as a UUID     → "The `folderId` is not valid"
        tags is an array              → "The tags property must be an array"
        every tag id parses           → "The tags `id` is not valid"

Reads and deletes look notes up by (id, user_id); a note owned by another
user is indistinguishable from one that does not exist.
"""

import logging
import uuid
from typing import Any, List, Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from noteful.exceptions import DatabaseError, NotFoundError, ValidationError
from noteful.models.mixins import utcnow
from noteful.models.note import Note
from noteful.models.tag import Tag
from noteful.schemas.note import NoteCreate, NoteResponse, NoteUpdate
from noteful.services.references import parse_id, validate_references

logger = logging.getLogger(__name__)

MISSING_TITLE = "Missing `title` in request body"
TITLE_NOT_STRING = "Incorrect field type: title must be string"
CONTENT_NOT_STRING = "Incorrect field type: content must be string"
INVALID_ID = "The `id` is not valid"
INVALID_FOLDER_ID = "The `folderId` is not valid"
INVALID_TAG_ID = "The `tagId` is not valid"
TAGS_NOT_ARRAY = "The tags property must be an array"
INVALID_TAG_IDS = "The tags `id` is not valid"


def _check_title(value: Any) -> str:
    if value is None or value == "":
        raise ValidationError(MISSING_TITLE, field="title")
    if not isinstance(value, str):
        raise ValidationError(TITLE_NOT_STRING, field="title")
    return value


def _check_content(value: Any) -> Optional[str]:
    """null clears the content; anything else must be a string."""
    if value is not None and not isinstance(value, str):
        raise ValidationError(CONTENT_NOT_STRING, field="content")
    return value


def _parse_folder_ref(value: Any) -> Optional[uuid.UUID]:
    """null and "" both mean "no folder"."""
    if value is None or value == "":
        return None
    return parse_id(value, INVALID_FOLDER_ID, field="folderId")


def _parse_tag_refs(value: Any) -> List[uuid.UUID]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(TAGS_NOT_ARRAY, field="tags")
    return [parse_id(tag, INVALID_TAG_IDS, field="tags") for tag in value]


class NoteService:
    """
    Business logic for notes.

    Responsibilities:
        - list_notes(): owner's notes, newest update first, optional filters
        - get_note(): single note or NotFoundError
        - create_note() / update_note(): validate → check references → persist
        - delete_note(): remove or NotFoundError

    Database failures are logged and re-raised as DatabaseError; our own
    exceptions propagate unchanged.
    """

    async def list_notes(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        search_term: Optional[str] = None,
        folder_id: Optional[str] = None,
        tag_id: Optional[str] = None,
    ) -> List[NoteResponse]:
        """
        List the user's notes.

        Args:
            search_term: case-insensitive substring of title or content
            folder_id: only notes in this folder
            tag_id: only notes carrying this tag

        Raises:
            ValidationError: folder_id or tag_id is not a valid id
        """
        query = select(Note).where(Note.user_id == user_id)

        if search_term:
            query = query.where(
                or_(
                    Note.title.icontains(search_term, autoescape=True),
                    Note.content.icontains(search_term, autoescape=True),
                )
            )

        if folder_id:
            query = query.where(Note.folder_id == parse_id(folder_id, INVALID_FOLDER_ID, "folderId"))

        if tag_id:
            tag_uuid = parse_id(tag_id, INVALID_TAG_ID, "tagId")
            query = query.where(Note.tags.any(Tag.id == tag_uuid))

        query = query.order_by(Note.updated_at.desc(), Note.id)

        try:
            result = await db.execute(query)
            notes = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, db: AsyncSession, user_id: uuid.UUID, note_id: str) -> NoteResponse:
        note = await self._get_owned(db, user_id, parse_id(note_id, INVALID_ID, "id"))
        return NoteResponse.model_validate(note)

    async def create_note(
        self,
        db: AsyncSession,
        session_factory: async_sessionmaker,
        user_id: uuid.UUID,
        payload: NoteCreate,
    ) -> NoteResponse:
        """
        Validate and store a new note.

        Raises:
            ValidationError: any shape or ownership check failed (→ 400)
            DatabaseError: insert failed (→ 500)
        """
        _check_title(payload.title)
        _check_content(payload.content)
        folder_id = _parse_folder_ref(payload.folder_id)
        tag_ids = _parse_tag_refs(payload.tags)

        await validate_references(session_factory, folder_id, tag_ids, user_id)

        try:
            note = Note(
                title=payload.title,
                content=payload.content,
                folder_id=folder_id,
                user_id=user_id,
                tags=await self._load_tags(db, tag_ids, user_id),
            )
            db.add(note)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Note %s created for user %s", note.id, user_id)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        db: AsyncSession,
        session_factory: async_sessionmaker,
        user_id: uuid.UUID,
        note_id: str,
        payload: NoteUpdate,
    ) -> NoteResponse:
        """
        Apply the fields present in `payload` to an existing note.

        Omitted keys keep their current value. `folderId: null` detaches the
        folder; `tags: []` clears the tags.

        Raises:
            ValidationError: malformed id, empty title, bad references (→ 400)
            NotFoundError: no such note for this user (→ 404)
        """
        note_uuid = parse_id(note_id, INVALID_ID, "id")
        fields = payload.model_fields_set

        if "title" in fields:
            _check_title(payload.title)
        if "content" in fields:
            _check_content(payload.content)
        folder_id = _parse_folder_ref(payload.folder_id) if "folder_id" in fields else None
        tag_ids = _parse_tag_refs(payload.tags) if "tags" in fields else []

        await validate_references(session_factory, folder_id, tag_ids, user_id)

        note = await self._get_owned(db, user_id, note_uuid)
        try:
            if "title" in fields:
                note.title = payload.title
            if "content" in fields:
                note.content = payload.content
            if "folder_id" in fields:
                note.folder_id = folder_id
            if "tags" in fields:
                note.tags = await self._load_tags(db, tag_ids, user_id)
            note.updated_at = utcnow()
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_uuid, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": str(note_uuid)},
            )

        logger.info("Note %s updated (%s)", note.id, ", ".join(sorted(fields)) or "no fields")
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, user_id: uuid.UUID, note_id: str) -> None:
        note = await self._get_owned(db, user_id, parse_id(note_id, INVALID_ID, "id"))
        try:
            await db.delete(note)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note.id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": str(note.id)},
            )
        logger.info("Note %s deleted", note.id)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _get_owned(self, db: AsyncSession, user_id: uuid.UUID, note_id: uuid.UUID) -> Note:
        try:
            result = await db.execute(
                select(Note).where(Note.id == note_id, Note.user_id == user_id)
            )
            note = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": str(note_id)},
            )

        if note is None:
            raise NotFoundError(resource="note", resource_id=str(note_id))
        return note

    async def _load_tags(
        self, db: AsyncSession, tag_ids: List[uuid.UUID], user_id: uuid.UUID
    ) -> List[Tag]:
        """Tags already passed the ownership check; this attaches them to `db`."""
        if not tag_ids:
            return []
        result = await db.execute(
            select(Tag).where(Tag.id.in_(tag_ids), Tag.user_id == user_id).order_by(Tag.name)
        )
        return list(result.scalars().all())


note_service = NoteService()
