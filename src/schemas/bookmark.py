"""Pydantic schemas and serialization for bookmark endpoints."""
from typing import Annotated, Any

from pydantic import AllowInfNan, BaseModel, ConfigDict, Strict, StrictInt

from core.sanitize import clean_markup, escape_markup
from models.bookmark import Bookmark

# Checked for presence on create, in this order when absent from the payload
REQUIRED_FIELDS: tuple[str, ...] = ("id", "title", "url", "description", "rating")

# Rejects bools, numeric strings, NaN and infinities
Rating = StrictInt | Annotated[float, Strict(), AllowInfNan(False)]


def find_missing_field(payload: dict[str, Any]) -> str | None:
    """
    Return the first required field that is null or absent, or None.

    Fields present in the payload are checked in the order they were sent;
    required fields missing from the payload entirely come after, in
    REQUIRED_FIELDS order.
    """
    ordered = [key for key in payload if key in REQUIRED_FIELDS]
    ordered += [key for key in REQUIRED_FIELDS if key not in payload]
    for field in ordered:
        if payload.get(field) is None:
            return field
    return None


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark."""

    model_config = ConfigDict(extra="ignore")

    id: StrictInt
    title: str
    url: str
    description: str
    rating: Rating


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses. Text fields are already sanitized."""

    id: int
    title: str
    url: str
    description: str | None
    rating: int | float


def coerce_rating(value: Any) -> int | float:
    """Coerce a stored rating to a number, keeping whole numbers as ints."""
    number = float(value)
    if number.is_integer():
        return int(number)
    return number


def serialize_bookmark(bookmark: Bookmark) -> BookmarkResponse:
    """Build the outbound representation of a bookmark with markup neutralized."""
    return BookmarkResponse(
        id=bookmark.id,
        title=escape_markup(bookmark.title),
        url=escape_markup(bookmark.url),
        description=clean_markup(bookmark.description),
        rating=coerce_rating(bookmark.rating),
    )
