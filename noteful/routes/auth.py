"""
Noteful API — Authentication Routes
===================================

What:  POST /api/login  exchanges credentials for a JWT.
       POST /api/refresh exchanges a valid JWT for a new one with a fresh expiry.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.user import LoginRequest, TokenResponse, TokenUser
from noteful.security import get_current_user
from noteful.services.auth_service import auth_service

router = APIRouter(prefix="/api", tags=["Authentication"])


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={
        400: {"description": "Missing credentials", "model": ErrorResponse},
        401: {"description": "Invalid credentials", "model": ErrorResponse},
    },
    summary="Log in and receive an auth token",
)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db_session),
) -> TokenResponse:
    return await auth_service.login(db=db, payload=payload)


@router.post(
    "/refresh",
    response_model=TokenResponse,
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
    summary="Refresh an auth token",
)
async def refresh(current_user: TokenUser = Depends(get_current_user)) -> TokenResponse:
    return auth_service.refresh(current_user)
