"""
Noteful API — User Registration Route
=====================================

What:  POST /api/users creates an account.

The body is taken as a raw JSON object rather than a Pydantic model:
registration reports missing and mistyped fields with its own 422
messages (see UserService), which a typed model would pre-empt.
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse, RegistrationErrorResponse
from noteful.schemas.user import UserResponse
from noteful.services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Users"])


@router.post(
    "/users",
    status_code=201,
    response_model=UserResponse,
    responses={
        201: {"description": "User created", "model": UserResponse},
        422: {"description": "Invalid payload or username taken", "model": RegistrationErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Register a new user",
)
async def register_user(
    response: Response,
    payload: Dict[str, Any] = Body(
        ...,
        examples=[{"username": "bobuser", "password": "baseball1", "fullname": "Bob User"}],
    ),
    db: AsyncSession = Depends(get_db_session),
) -> UserResponse:
    user = await user_service.register(db=db, payload=payload)
    response.headers["Location"] = f"/api/users/{user.id}"
    return user
