"""Schemas for registration, login and token responses."""

import uuid
from typing import Any, Optional

from pydantic import Field

from noteful.schemas.common import APIModel


class UserResponse(APIModel):
    """Public view of a user. The password digest is never part of it."""
    id: uuid.UUID
    username: str
    fullname: Optional[str] = None


class LoginRequest(APIModel):
    """Loosely typed so AuthService can answer bad input with its own 400."""
    username: Any = None
    password: Any = None


class TokenResponse(APIModel):
    """Returned by POST /api/login and POST /api/refresh."""
    auth_token: str = Field(description="Signed JWT to send as `Authorization: Bearer <token>`")


class TokenUser(APIModel):
    """
    The identity carried inside a JWT's `user` claim.

    Handlers receive this (not a User row) from the auth dependency, so an
    authenticated request costs no database round-trip.
    """
    id: uuid.UUID
    username: str
    fullname: Optional[str] = None
