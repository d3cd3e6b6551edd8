"""
Noteful API — Note, Folder and Tag Schemas
==========================================

What:  Request bodies and responses for the three owned resources.

Note request models are loosely typed: every field accepts any JSON value
so NoteService can answer a malformed body with its own 400 messages
instead of FastAPI's generic 422.
"""

import uuid
from datetime import datetime
from typing import Any, List, Optional

from pydantic import Field

from noteful.schemas.common import APIModel


# ══════════════════════════════════════════════════════════════════════════
# Tags & Folders
# ══════════════════════════════════════════════════════════════════════════


class TagResponse(APIModel):
    id: uuid.UUID
    name: str
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class FolderResponse(APIModel):
    id: uuid.UUID
    name: str
    user_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class NameRequest(APIModel):
    """Body for creating or renaming a folder or tag."""
    name: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Notes
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(APIModel):
    """
    Full representation of a note.

    `tags` are expanded to full tag objects; the folder is referenced by id.
    """
    id: uuid.UUID
    title: str
    content: Optional[str] = None
    folder_id: Optional[uuid.UUID] = None
    user_id: uuid.UUID
    tags: List[TagResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class NoteCreate(APIModel):
    """
    Body of POST /api/notes.

    Example:
        {
            "title": "Groceries",
            "content": "eggs, milk",
            "folderId": "9b1deb4d-3b7d-4bad-9bdd-2b0d7b3dcb6d",
            "tags": ["1b9d6bcd-bbfd-4b2d-9b5d-ab8dfbbd4bed"]
        }
    """
    title: Any = None
    content: Any = None
    folder_id: Any = None
    tags: Any = None


class NoteUpdate(NoteCreate):
    """
    Body of PUT /api/notes/{id}.

    Same fields as NoteCreate; only the keys actually present in the body
    are applied (see `model_fields_set`).
    """
