"""
Noteful API — Tag Service
=========================

Tags share their CRUD with folders (see named_resource.py). Deleting a tag
strips it from every note that carries it.
"""

import uuid

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.models.note import note_tags
from noteful.models.tag import Tag
from noteful.schemas.note import TagResponse
from noteful.services.named_resource import NamedResourceService


class TagService(NamedResourceService[Tag, TagResponse]):
    model = Tag
    response_model = TagResponse
    resource = "tag"

    async def _detach(self, db: AsyncSession, user_id: uuid.UUID, item_id: uuid.UUID) -> None:
        # A tag only ever sits on its owner's notes, so the tag id is enough
        await db.execute(delete(note_tags).where(note_tags.c.tag_id == item_id))


tag_service = TagService()
