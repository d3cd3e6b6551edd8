"""
Noteful API — Shared CRUD for Named, User-Owned Resources
=========================================================

What:  Folders and tags have the same shape (a name unique per user) and
       the same endpoints. This base class implements both; subclasses
       only say which model they manage and how to detach it from notes
       before deletion.
Who:   FolderService, TagService.

Errors:
    malformed id                 → ValidationError  "The `id` is not valid"
    missing/empty name           → ValidationError  "Missing `name` in request body"
    name already used by owner   → ValidationError  "<Resource> name already exists"
    not found / owned by another → NotFoundError
"""

import logging
import uuid
from typing import Generic, List, Optional, Type, TypeVar

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import DatabaseError, NotFoundError, ValidationError
from noteful.models.mixins import utcnow
from noteful.services.references import parse_id

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")
ResponseT = TypeVar("ResponseT", bound=BaseModel)

MISSING_NAME = "Missing `name` in request body"
INVALID_ID = "The `id` is not valid"


class NamedResourceService(Generic[ModelT, ResponseT]):
    """
    Ownership-scoped CRUD for a model with `id`, `name` and `user_id` columns.

    Subclasses set:
        model:          the ORM class
        response_model: the Pydantic response schema
        resource:       lowercase resource name used in messages and logs
    and may override `_detach()`.
    """

    model: Type[ModelT]
    response_model: Type[ResponseT]
    resource: str = "resource"

    @property
    def duplicate_message(self) -> str:
        return f"{self.resource.capitalize()} name already exists"

    async def list_items(self, db: AsyncSession, user_id: uuid.UUID) -> List[ResponseT]:
        try:
            result = await db.execute(
                select(self.model)
                .where(self.model.user_id == user_id)
                .order_by(self.model.name)
            )
            items = result.scalars().all()
        except SQLAlchemyError as e:
            logger.error("Database error listing %ss: %s", self.resource, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Could not retrieve {self.resource}s. Please try again.",
                context={"error_type": type(e).__name__},
            )
        return [self.response_model.model_validate(item) for item in items]

    async def get_item(self, db: AsyncSession, user_id: uuid.UUID, item_id: str) -> ResponseT:
        item = await self._get_owned(db, user_id, parse_id(item_id, INVALID_ID, "id"))
        return self.response_model.model_validate(item)

    async def create_item(
        self, db: AsyncSession, user_id: uuid.UUID, name: Optional[str]
    ) -> ResponseT:
        if not name:
            raise ValidationError(MISSING_NAME, field="name")

        item = self.model(name=name, user_id=user_id)
        db.add(item)
        await self._flush(db, name)

        logger.info("%s %s created for user %s", self.resource.capitalize(), item.id, user_id)
        return self.response_model.model_validate(item)

    async def update_item(
        self, db: AsyncSession, user_id: uuid.UUID, item_id: str, name: Optional[str]
    ) -> ResponseT:
        item_uuid = parse_id(item_id, INVALID_ID, "id")
        if not name:
            raise ValidationError(MISSING_NAME, field="name")

        item = await self._get_owned(db, user_id, item_uuid)
        item.name = name
        item.updated_at = utcnow()
        await self._flush(db, name)

        logger.info("%s %s renamed", self.resource.capitalize(), item.id)
        return self.response_model.model_validate(item)

    async def delete_item(self, db: AsyncSession, user_id: uuid.UUID, item_id: str) -> None:
        item = await self._get_owned(db, user_id, parse_id(item_id, INVALID_ID, "id"))
        try:
            await self._detach(db, user_id, item.id)
            await db.delete(item)
            await db.flush()
        except SQLAlchemyError as e:
            logger.error(
                "Database error deleting %s %s: %s", self.resource, item.id, str(e), exc_info=True
            )
            raise DatabaseError(
                message=f"Could not delete the {self.resource}. Please try again.",
                context={"resource_id": str(item.id)},
            )
        logger.info("%s %s deleted", self.resource.capitalize(), item.id)

    # ── Hooks & Helpers ───────────────────────────────────────────────────

    async def _detach(self, db: AsyncSession, user_id: uuid.UUID, item_id: uuid.UUID) -> None:
        """Remove references from the owner's notes before the row goes away."""

    async def _get_owned(self, db: AsyncSession, user_id: uuid.UUID, item_id: uuid.UUID) -> ModelT:
        try:
            result = await db.execute(
                select(self.model).where(self.model.id == item_id, self.model.user_id == user_id)
            )
            item = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error("Database error fetching %s %s: %s", self.resource, item_id, str(e))
            raise DatabaseError(
                message=f"Could not retrieve the {self.resource}. Please try again.",
                context={"resource_id": str(item_id)},
            )

        if item is None:
            raise NotFoundError(resource=self.resource, resource_id=str(item_id))
        return item

    async def _flush(self, db: AsyncSession, name: str) -> None:
        """Flush pending changes, mapping the (name, user_id) unique violation to a 400."""
        try:
            await db.flush()
        except IntegrityError:
            logger.info("Duplicate %s name rejected: %s", self.resource, name)
            raise ValidationError(self.duplicate_message, field="name") from None
        except SQLAlchemyError as e:
            logger.error("Database error saving %s: %s", self.resource, str(e), exc_info=True)
            raise DatabaseError(
                message=f"Could not save the {self.resource}. Please try again.",
                context={"error_type": type(e).__name__},
            )
