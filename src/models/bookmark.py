"""Bookmark model for storing saved links."""
from sqlalchemy import Float, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Bookmark(Base):
    """A saved link with a title, optional description and a rating."""

    __tablename__ = "bookmarks"

    # Supplied by the client on creation, never generated by the database
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(Text)
    url: Mapped[str] = mapped_column(Text)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    rating: Mapped[float] = mapped_column(Float)

    def __repr__(self) -> str:
        return f"<Bookmark id={self.id} url={self.url!r}>"
