"""
Noteful API — User SQLAlchemy Model
===================================

What:  ORM model for the `users` table.
Who:   Written by UserService on registration; read by AuthService on login.

Table Design:
    - username: globally unique (unique index), compared case-sensitively
    - password: bcrypt digest only; the plaintext never reaches this model
    - fullname: optional display name, stored trimmed

    Free-text columns are TEXT: the only length rules are the ones
    UserService applies to the password.
"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base
from noteful.models.mixins import IdMixin, TimestampMixin


class User(IdMixin, TimestampMixin, Base):
    """A registered account. Owns folders, tags and notes."""

    __tablename__ = "users"

    username: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        unique=True,
        comment="Login name, unique across all users",
    )

    password: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="bcrypt digest of the user's password",
    )

    fullname: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username='{self.username}')>"
