"""FastAPI dependencies for injection."""
from collections.abc import AsyncGenerator

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from services import bookmark_service


async def get_async_session(request: Request) -> AsyncGenerator[AsyncSession]:
    """Yield a database session bound to this application's engine."""
    session_factory = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def lookup_bookmark(
    bookmark_id: int,
    db: AsyncSession = Depends(get_async_session),
) -> Bookmark | None:
    """
    Fetch the bookmark named in the path.

    Returns None when it doesn't exist; the route decides how to respond.
    """
    return await bookmark_service.get_by_id(db, bookmark_id)


__all__ = [
    "get_async_session",
    "lookup_bookmark",
]
