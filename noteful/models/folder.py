"""ORM model for the `folders` table."""

import uuid

from sqlalchemy import ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base
from noteful.models.mixins import IdMixin, TimestampMixin


class Folder(IdMixin, TimestampMixin, Base):
    """
    A named container for notes.

    Folder names are unique per user, not globally: two users may both
    have a folder called "Work".
    """

    __tablename__ = "folders"

    name: Mapped[str] = mapped_column(Text, nullable=False)

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        UniqueConstraint("name", "user_id", name="uq_folders_name_user"),
    )

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"
