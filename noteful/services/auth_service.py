"""
Noteful API — Authentication Service
====================================

What:  Exchanges a username/password for a JWT, and re-issues tokens.
Who:   Called by POST /api/login and POST /api/refresh.

Unknown usernames and wrong passwords produce the same 401 so the endpoint
cannot be used to discover which usernames exist.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import AuthenticationError, DatabaseError, ValidationError
from noteful.models.user import User
from noteful.schemas.user import LoginRequest, TokenResponse, TokenUser
from noteful.security import create_auth_token, verify_password

logger = logging.getLogger(__name__)

MISSING_CREDENTIALS = "Missing `username` or `password` in request body"
INVALID_CREDENTIALS = "Invalid credentials"


class AuthService:
    async def login(self, db: AsyncSession, payload: LoginRequest) -> TokenResponse:
        """
        Raises:
            ValidationError: username or password missing or not a string (→ 400)
            AuthenticationError: unknown user or wrong password (→ 401)
        """
        if not all(
            isinstance(value, str) and value for value in (payload.username, payload.password)
        ):
            raise ValidationError(MISSING_CREDENTIALS)

        try:
            result = await db.execute(select(User).where(User.username == payload.username))
            user = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error during login: %s", str(e), exc_info=True)
            raise DatabaseError(context={"error_type": type(e).__name__})

        if user is None or not await verify_password(payload.password, user.password):
            logger.info("Failed login for username %r", payload.username)
            raise AuthenticationError(INVALID_CREDENTIALS)

        logger.info("User %s logged in", user.id)
        return TokenResponse(auth_token=create_auth_token(TokenUser.model_validate(user)))

    def refresh(self, user: TokenUser) -> TokenResponse:
        """Issue a fresh token for an already-authenticated user."""
        return TokenResponse(auth_token=create_auth_token(user))


auth_service = AuthService()
