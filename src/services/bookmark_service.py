"""
Service layer for bookmark persistence.

Functions here take the session as their first argument and hold no state.
Rows are returned as stored; validation and sanitization belong to the API
layer.
"""
from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark


async def get_all_bookmarks(db: AsyncSession) -> Sequence[Bookmark]:
    """Return every stored bookmark, in table order."""
    result = await db.execute(select(Bookmark))
    return result.scalars().all()


async def insert_bookmark(db: AsyncSession, new_bookmark: dict[str, Any]) -> Bookmark:
    """
    Insert a bookmark and return the stored row.

    Args:
        db: Database session.
        new_bookmark: Column values, including the caller-chosen `id`.

    Raises:
        sqlalchemy.exc.IntegrityError: If a constraint is violated (e.g. duplicate id).
    """
    bookmark = Bookmark(**new_bookmark)
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    return bookmark


async def get_by_id(db: AsyncSession, bookmark_id: int) -> Bookmark | None:
    """Return the bookmark with the given id, or None if there isn't one."""
    result = await db.execute(select(Bookmark).where(Bookmark.id == bookmark_id))
    return result.scalar_one_or_none()


async def delete_bookmark(db: AsyncSession, bookmark_id: int) -> int:
    """Delete the bookmark with the given id. Returns the number of rows removed."""
    result = await db.execute(delete(Bookmark).where(Bookmark.id == bookmark_id))
    return result.rowcount
