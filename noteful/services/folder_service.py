"""
Noteful API — Folder Service
============================

Folders share their CRUD with tags (see named_resource.py). Deleting a
folder keeps its notes: they are moved out of the folder first.
"""

import uuid

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.models.folder import Folder
from noteful.models.note import Note
from noteful.schemas.note import FolderResponse
from noteful.services.named_resource import NamedResourceService


class FolderService(NamedResourceService[Folder, FolderResponse]):
    model = Folder
    response_model = FolderResponse
    resource = "folder"

    async def _detach(self, db: AsyncSession, user_id: uuid.UUID, item_id: uuid.UUID) -> None:
        await db.execute(
            update(Note)
            .where(Note.folder_id == item_id, Note.user_id == user_id)
            .values(folder_id=None)
        )


folder_service = FolderService()
