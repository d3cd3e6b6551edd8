"""ORM model for the `tags` table."""

import uuid

from sqlalchemy import ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base
from noteful.models.mixins import IdMixin, TimestampMixin


class Tag(IdMixin, TimestampMixin, Base):
    """A label that can be attached to any number of the owner's notes."""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(Text, nullable=False)

    user_id: Mapped[uuid.UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (
        UniqueConstraint("name", "user_id", name="uq_tags_name_user"),
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, name='{self.name}')>"
