"""
Noteful API — Tags Route Handlers
=================================

What:  CRUD endpoints for the authenticated user's tags.
       Deleting a tag removes it from every note that carries it.
"""

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.note import NameRequest, TagResponse
from noteful.schemas.user import TokenUser
from noteful.security import get_current_user
from noteful.services.tag_service import tag_service

router = APIRouter(
    prefix="/api/tags",
    tags=["Tags"],
    dependencies=[Depends(get_current_user)],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)

_NOT_FOUND = {"description": "Tag not found", "model": ErrorResponse}
_BAD_REQUEST = {"description": "Invalid input or duplicate name", "model": ErrorResponse}


@router.get("", response_model=List[TagResponse], summary="List tags")
async def list_tags(
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[TagResponse]:
    return await tag_service.list_items(db=db, user_id=current_user.id)


@router.get(
    "/{tag_id}",
    response_model=TagResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND},
    summary="Get a single tag by ID",
)
async def get_tag(
    tag_id: str,
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    return await tag_service.get_item(db=db, user_id=current_user.id, item_id=tag_id)


@router.post(
    "",
    status_code=201,
    response_model=TagResponse,
    responses={400: _BAD_REQUEST},
    summary="Create a tag",
)
async def create_tag(
    payload: NameRequest,
    response: Response,
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    tag = await tag_service.create_item(db=db, user_id=current_user.id, name=payload.name)
    response.headers["Location"] = f"{router.prefix}/{tag.id}"
    return tag


@router.put(
    "/{tag_id}",
    response_model=TagResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND},
    summary="Rename a tag",
)
async def update_tag(
    tag_id: str,
    payload: NameRequest,
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> TagResponse:
    return await tag_service.update_item(
        db=db, user_id=current_user.id, item_id=tag_id, name=payload.name
    )


@router.delete(
    "/{tag_id}",
    status_code=204,
    response_class=Response,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND},
    summary="Delete a tag",
)
async def delete_tag(
    tag_id: str,
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await tag_service.delete_item(db=db, user_id=current_user.id, item_id=tag_id)
    return Response(status_code=204)
