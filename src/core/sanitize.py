"""
HTML sanitization for user-supplied text echoed back to clients.

Bookmarks are stored as submitted; markup is neutralized on the way out so
stored script payloads can't execute in a client that renders the fields.
"""
import re

from bleach.sanitizer import Cleaner

# Inert formatting tags allowed through in free-form text (description)
ALLOWED_TEXT_TAGS = {
    "a",
    "abbr",
    "b",
    "blockquote",
    "br",
    "code",
    "em",
    "i",
    "img",
    "li",
    "ol",
    "p",
    "pre",
    "small",
    "span",
    "strong",
    "sub",
    "sup",
    "u",
    "ul",
}

ALLOWED_TEXT_ATTRS = {
    "a": ["href", "title"],
    "abbr": ["title"],
    "img": ["src", "alt", "title"],
}

ALLOWED_PROTOCOLS = ["http", "https", "mailto"]

_TEXT_CLEANER = Cleaner(
    tags=ALLOWED_TEXT_TAGS,
    attributes=ALLOWED_TEXT_ATTRS,
    protocols=ALLOWED_PROTOCOLS,
    strip=False,
    strip_comments=True,
)

# Splits cleaned output into tags (odd indexes) and the text between them
_TAG_SPLIT = re.compile(r"(<[^>]*>)")


def escape_markup(value: str | None) -> str | None:
    """Escape angle brackets in a plain-text field so no tag survives."""
    if value is None:
        return None
    return value.replace("<", "&lt;").replace(">", "&gt;")


def clean_markup(value: str | None) -> str | None:
    """
    Sanitize a free-form text field.

    Allow-listed tags pass through (minus any attributes not in
    ALLOWED_TEXT_ATTRS, e.g. event handlers); anything else is escaped.
    """
    if value is None:
        return None
    cleaned = _TEXT_CLEANER.clean(value)
    # bleach escapes bare "&" in text; put it back so "Tom & Jerry" reads as sent
    parts = _TAG_SPLIT.split(cleaned)
    parts[::2] = [part.replace("&amp;", "&") for part in parts[::2]]
    return "".join(parts)
