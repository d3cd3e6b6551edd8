"""
Noteful API — Identifier Parsing & Ownership Checks
===================================================

What:  Turns client-supplied ids into UUIDs and verifies that folder/tag
       references belong to the authenticated user.
Who:   NoteService (create/update/list), FolderService and TagService.

Two kinds of checks, run in this order:

    1. Synchronous shape checks (parse_id): a malformed id is a 400 with a
       message naming the offending field. No I/O.
    2. Asynchronous ownership checks (validate_folder_id, validate_tag_ids):
       each runs one ownership-scoped query. validate_references runs both
       concurrently, each on its own short-lived session, and reports the
       folder failure ahead of the tag failure when both fail.
"""

import asyncio
import logging
import uuid
from typing import Any, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from noteful.exceptions import ValidationError
from noteful.models.folder import Folder
from noteful.models.tag import Tag

logger = logging.getLogger(__name__)

INVALID_FOLDER = "The folder is not valid"
INVALID_TAG = "The tag is not valid"


def parse_id(value: Any, message: str, field: Optional[str] = None) -> uuid.UUID:
    """
    Parse `value` as a UUID or raise ValidationError(message).

    Accepts UUID instances and their string forms; anything else (numbers,
    objects, malformed strings) is rejected.
    """
    if isinstance(value, uuid.UUID):
        return value
    if not isinstance(value, str):
        raise ValidationError(message, field=field)
    try:
        return uuid.UUID(value)
    except ValueError:
        raise ValidationError(message, field=field) from None


async def validate_folder_id(
    db: AsyncSession,
    folder_id: Optional[uuid.UUID],
    user_id: uuid.UUID,
) -> None:
    """No folder is always valid; otherwise it must exist and be owned by `user_id`."""
    if folder_id is None:
        return
    result = await db.execute(
        select(Folder.id).where(Folder.id == folder_id, Folder.user_id == user_id)
    )
    if result.scalar_one_or_none() is None:
        raise ValidationError(INVALID_FOLDER, field="folderId")


async def validate_tag_ids(
    db: AsyncSession,
    tag_ids: Sequence[uuid.UUID],
    user_id: uuid.UUID,
) -> None:
    """
    Every id in `tag_ids` must name a tag owned by `user_id`.

    Compares the number of matching rows with the length of the input, so a
    repeated id counts as invalid as well.
    """
    if not tag_ids:
        return
    result = await db.execute(
        select(func.count(Tag.id)).where(Tag.id.in_(list(tag_ids)), Tag.user_id == user_id)
    )
    if result.scalar_one() != len(tag_ids):
        raise ValidationError(INVALID_TAG, field="tags")


async def validate_references(
    session_factory: async_sessionmaker,
    folder_id: Optional[uuid.UUID],
    tag_ids: Sequence[uuid.UUID],
    user_id: uuid.UUID,
) -> None:
    """
    Run the folder and tag ownership checks concurrently.

    Raises:
        ValidationError: "The folder is not valid" or "The tag is not valid"
    """

    async def run(check, *args) -> None:
        async with session_factory() as session:
            await check(session, *args)

    outcomes = await asyncio.gather(
        run(validate_folder_id, folder_id, user_id),
        run(validate_tag_ids, tag_ids, user_id),
        return_exceptions=True,
    )
    for outcome in outcomes:
        if isinstance(outcome, BaseException):
            if isinstance(outcome, ValidationError):
                logger.info("Reference check failed for user %s: %s", user_id, outcome.message)
            raise outcome
