"""
Noteful API — User Registration Service
=======================================

What:  Validates a signup payload, enforces unique usernames, stores the
       bcrypt digest of the password.
Who:   Called by POST /api/users.

Validation order (first failure wins, every failure is a 422):
    1. required fields present          "Missing 'username' in request body"
    2. string fields are strings        "Incorrect field type: password must be string"
    3. credentials not padded           "Need to remove whitespace in username"
    4. credential lengths               "Must be at least 8 characters long"
    5. username not taken               "Username bob already exist, please pick a new one"

Padded credentials are rejected, never trimmed. `fullname` is trimmed
silently.

bcrypt ignores everything past 72 bytes, hence the password maximum.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import DatabaseError, RegistrationError
from noteful.models.user import User
from noteful.schemas.user import UserResponse
from noteful.security import hash_password

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("username", "password")
STRING_FIELDS = ("username", "password", "fullname")
EXPLICITLY_TRIMMED_FIELDS = ("username", "password")
SIZED_FIELDS: Dict[str, Dict[str, int]] = {
    "username": {"min": 1},
    "password": {"min": 8, "max": 72},
}


@dataclass
class Registration:
    """A payload that passed every synchronous check."""
    username: str
    password: str
    fullname: Optional[str] = None


def validate_registration(payload: Dict[str, Any]) -> Registration:
    """
    Run the synchronous registration checks on a raw JSON body.

    Raises:
        RegistrationError: with `location` set to the offending field
    """
    for field in REQUIRED_FIELDS:
        if field not in payload:
            raise RegistrationError(f"Missing '{field}' in request body", location=field)

    for field in STRING_FIELDS:
        if field in payload and not isinstance(payload[field], str):
            raise RegistrationError(
                f"Incorrect field type: {field} must be string", location=field
            )

    for field in EXPLICITLY_TRIMMED_FIELDS:
        if payload[field].strip() != payload[field]:
            raise RegistrationError(f"Need to remove whitespace in {field}", location=field)

    for field, limits in SIZED_FIELDS.items():
        length = len(payload[field])
        if "min" in limits and length < limits["min"]:
            raise RegistrationError(
                f"Must be at least {limits['min']} characters long", location=field
            )
        if "max" in limits and length > limits["max"]:
            raise RegistrationError(
                f"Must be at most {limits['max']} characters long", location=field
            )

    fullname = payload.get("fullname")
    if fullname is not None:
        fullname = fullname.strip() or None

    return Registration(
        username=payload["username"],
        password=payload["password"],
        fullname=fullname,
    )


class UserService:
    """Registration workflow: validate → uniqueness → hash → insert."""

    async def register(self, db: AsyncSession, payload: Dict[str, Any]) -> UserResponse:
        """
        Create a user from a raw signup body.

        Raises:
            RegistrationError: invalid payload or username taken (→ 422)
            DatabaseError: query or insert failed (→ 500)
        """
        registration = validate_registration(payload)

        try:
            result = await db.execute(
                select(func.count(User.id)).where(User.username == registration.username)
            )
            count = result.scalar_one()
        except SQLAlchemyError as e:
            logger.error("Database error checking username: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        if count > 0:
            raise self._username_taken(registration.username)

        user = User(
            username=registration.username,
            password=await hash_password(registration.password),
            fullname=registration.fullname,
        )
        db.add(user)
        try:
            await db.flush()
        except IntegrityError:
            # Lost a race with a concurrent signup for the same name
            raise self._username_taken(registration.username) from None
        except SQLAlchemyError as e:
            logger.error("Database error creating user: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        logger.info("User %s registered (%s)", user.id, user.username)
        return UserResponse.model_validate(user)

    @staticmethod
    def _username_taken(username: str) -> RegistrationError:
        return RegistrationError(
            f"Username {username} already exist, please pick a new one",
            location="username",
        )


user_service = UserService()
