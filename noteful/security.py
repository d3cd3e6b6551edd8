"""
Noteful API — Password Hashing & JWT Authentication
===================================================

What:  bcrypt password digests, JWT issue/verify, and the FastAPI
       dependency that turns a bearer token into the current user.
How:   passlib's CryptContext for hashing, python-jose for tokens.
Who:   UserService (hash on signup), AuthService (verify on login, issue
       tokens) and every protected router (get_current_user).

Token format (HS256 by default):
    {
        "sub": "<username>",
        "user": {"id": "<uuid>", "username": "...", "fullname": "..."},
        "exp": <unix timestamp>
    }

bcrypt is CPU-bound; hashing and verification run
in Starlette's threadpool instead of on the event loop.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import ValidationError as PydanticValidationError
from starlette.concurrency import run_in_threadpool

from noteful.config import settings
from noteful.exceptions import AuthenticationError
from noteful.schemas.user import TokenUser

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Missing header is reported through AuthenticationError, not FastAPI's 401
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)


# ── Passwords ─────────────────────────────────────────────────────────────

async def hash_password(password: str) -> str:
    return await run_in_threadpool(pwd_context.hash, password)


async def verify_password(password: str, digest: str) -> bool:
    return await run_in_threadpool(pwd_context.verify, password, digest)


# ── Tokens ────────────────────────────────────────────────────────────────

def create_auth_token(user: TokenUser, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a JWT for `user`.

    Args:
        user: Identity to embed in the `user` claim
        expires_delta: Lifetime override (defaults to JWT_EXPIRY_MINUTES)
    """
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.jwt_expiry_minutes)
    )
    claims = {
        "sub": user.username,
        "user": user.model_dump(mode="json"),
        "exp": expire,
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_auth_token(token: str) -> TokenUser:
    """
    Verify a JWT and return the identity it carries.

    Raises:
        AuthenticationError: bad signature, expired, or missing `user` claim
    """
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        logger.info("Rejected auth token: %s", str(e))
        raise AuthenticationError() from None

    try:
        return TokenUser.model_validate(claims.get("user"))
    except PydanticValidationError:
        logger.info("Rejected auth token: malformed `user` claim")
        raise AuthenticationError() from None


async def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> TokenUser:
    """
    FastAPI dependency guarding every protected route.

    Declared on the protected routers, so an unauthenticated request fails
    before the handler runs. No database lookup: the token is the proof.
    """
    if not token:
        raise AuthenticationError()
    return decode_auth_token(token)
