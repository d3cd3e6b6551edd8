"""
Noteful API — Folders Route Handlers
====================================

What:  CRUD endpoints for the authenticated user's folders.
       Deleting a folder moves its notes out of it; the notes are kept.
"""

from typing import List

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.schemas.common import ErrorResponse
from noteful.schemas.note import FolderResponse, NameRequest
from noteful.schemas.user import TokenUser
from noteful.security import get_current_user
from noteful.services.folder_service import folder_service

router = APIRouter(
    prefix="/api/folders",
    tags=["Folders"],
    dependencies=[Depends(get_current_user)],
    responses={401: {"description": "Missing or invalid token", "model": ErrorResponse}},
)

_NOT_FOUND = {"description": "Folder not found", "model": ErrorResponse}
_BAD_REQUEST = {"description": "Invalid input or duplicate name", "model": ErrorResponse}


@router.get("", response_model=List[FolderResponse], summary="List folders")
async def list_folders(
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[FolderResponse]:
    return await folder_service.list_items(db=db, user_id=current_user.id)


@router.get(
    "/{folder_id}",
    response_model=FolderResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND},
    summary="Get a single folder by ID",
)
async def get_folder(
    folder_id: str,
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    return await folder_service.get_item(db=db, user_id=current_user.id, item_id=folder_id)


@router.post(
    "",
    status_code=201,
    response_model=FolderResponse,
    responses={400: _BAD_REQUEST},
    summary="Create a folder",
)
async def create_folder(
    payload: NameRequest,
    response: Response,
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    folder = await folder_service.create_item(db=db, user_id=current_user.id, name=payload.name)
    response.headers["Location"] = f"{router.prefix}/{folder.id}"
    return folder


@router.put(
    "/{folder_id}",
    response_model=FolderResponse,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND},
    summary="Rename a folder",
)
async def update_folder(
    folder_id: str,
    payload: NameRequest,
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> FolderResponse:
    return await folder_service.update_item(
        db=db, user_id=current_user.id, item_id=folder_id, name=payload.name
    )


@router.delete(
    "/{folder_id}",
    status_code=204,
    response_class=Response,
    responses={400: _BAD_REQUEST, 404: _NOT_FOUND},
    summary="Delete a folder",
)
async def delete_folder(
    folder_id: str,
    current_user: TokenUser = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await folder_service.delete_item(db=db, user_id=current_user.id, item_id=folder_id)
    return Response(status_code=204)
