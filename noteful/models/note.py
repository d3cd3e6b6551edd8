"""
Noteful API — Note SQLAlchemy Model
===================================

What:  ORM model for the `notes` table and the `note_tags` association table.
Who:   Used by NoteService for CRUD; by FolderService/TagService when a
       folder or tag is deleted and has to be detached from notes.

Table Design:
    - title:     required, never empty, unbounded TEXT
    - content:   optional free text (TEXT, no length limit)
    - folder_id: optional; ON DELETE SET NULL so removing a folder keeps notes
    - user_id:   owner; every query filters on it
    - tags:      many-to-many through note_tags, loaded with selectin so the
                 collection is available in async code without lazy loads

    Index on (user_id, updated_at DESC):
        Serves the list endpoint, which always filters by owner and returns
        the most recently updated notes first.

Invariant (enforced by NoteService, not by the schema):
    folder.user_id == note.user_id and tag.user_id == note.user_id for
    every tag in note.tags.
"""

import uuid
from typing import List, Optional

from sqlalchemy import Column, ForeignKey, Index, Table, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from noteful.database import Base
from noteful.models.mixins import IdMixin, TimestampMixin
from noteful.models.tag import Tag


note_tags = Table(
    "note_tags",
    Base.metadata,
    Column("note_id", ForeignKey("notes.id", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True),
)


class Note(IdMixin, TimestampMixin, Base):
    """A user's note, optionally filed in a folder and labelled with tags."""

    __tablename__ = "notes"

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[Optional[str]] = mapped_column(Text, nullable=True, default=None)

    folder_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        ForeignKey("folders.id", ondelete="SET NULL"),
        nullable=True,
        default=None,
    )

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    tags: Mapped[List[Tag]] = relationship(
        secondary=note_tags,
        lazy="selectin",
        order_by=Tag.name,
    )

    __table_args__ = (
        Index("idx_notes_user_updated_at", "user_id", "updated_at"),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}')>"
