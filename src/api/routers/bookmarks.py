"""Bookmark CRUD endpoints."""
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, lookup_bookmark
from api.errors import error_response
from models.bookmark import Bookmark
from schemas.bookmark import (
    BookmarkCreate,
    BookmarkResponse,
    find_missing_field,
    serialize_bookmark,
)
from services import bookmark_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])

NOT_FOUND_MESSAGE = "Bookmark doesn't exist"


@router.get("", response_model=list[BookmarkResponse])
async def list_bookmarks(
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkResponse]:
    """List all bookmarks."""
    bookmarks = await bookmark_service.get_all_bookmarks(db)
    return [serialize_bookmark(b) for b in bookmarks]


@router.post(
    "",
    response_model=BookmarkResponse,
    status_code=201,
    responses={400: {"description": "Missing or invalid field"}},
    # The body is read by hand so field order survives; document it explicitly
    openapi_extra={
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": BookmarkCreate.model_json_schema()}},
        },
    },
)
async def create_bookmark(
    request: Request,
    db: AsyncSession = Depends(get_async_session),
) -> Response:
    """
    Create a bookmark.

    Every field in the body is required (including `id`, which the client
    chooses). The first null or missing field is reported in a 400.
    """
    try:
        payload = await request.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        return error_response(400, "Request body must be a JSON object")

    missing = find_missing_field(payload)
    if missing is not None:
        return error_response(400, f"Missing '{missing}' in request body")

    try:
        data = BookmarkCreate.model_validate(payload)
    except ValidationError as e:
        field = e.errors()[0]["loc"][0]
        return error_response(400, f"Invalid '{field}' in request body")

    bookmark = await bookmark_service.insert_bookmark(db, data.model_dump())
    # Commit before responding; dependency teardown may run after the response is sent
    await db.commit()
    logger.info("bookmark_created", extra={"bookmark_id": bookmark.id})
    return JSONResponse(
        status_code=201,
        content=serialize_bookmark(bookmark).model_dump(),
        headers={"Location": f"/bookmarks/{bookmark.id}"},
    )


@router.get(
    "/{bookmark_id}",
    response_model=BookmarkResponse,
    responses={404: {"description": NOT_FOUND_MESSAGE}},
)
async def get_bookmark(
    bookmark: Bookmark | None = Depends(lookup_bookmark),
) -> Response | BookmarkResponse:
    """Get a single bookmark by ID."""
    if bookmark is None:
        return error_response(404, NOT_FOUND_MESSAGE)
    return serialize_bookmark(bookmark)


@router.delete(
    "/{bookmark_id}",
    status_code=204,
    responses={404: {"description": NOT_FOUND_MESSAGE}},
)
async def delete_bookmark(
    bookmark_id: int,
    bookmark: Bookmark | None = Depends(lookup_bookmark),
    db: AsyncSession = Depends(get_async_session),
) -> Response:
    """Delete a bookmark."""
    if bookmark is None:
        return error_response(404, NOT_FOUND_MESSAGE)
    await bookmark_service.delete_bookmark(db, bookmark_id)
    await db.commit()
    logger.info("bookmark_deleted", extra={"bookmark_id": bookmark_id})
    return Response(status_code=204)
