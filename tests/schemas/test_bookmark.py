"""Tests for bookmark schema helpers."""
import pytest

from models.bookmark import Bookmark
from schemas.bookmark import coerce_rating, find_missing_field, serialize_bookmark


class TestFindMissingField:
    """Tests for find_missing_field."""

    def test__find_missing_field__complete_payload(self) -> None:
        payload = {"id": 1, "title": "t", "url": "u", "description": "d", "rating": 1}
        assert find_missing_field(payload) is None

    def test__find_missing_field__absent_fields_in_fixed_order(self) -> None:
        assert find_missing_field({"id": 1}) == "title"
        assert find_missing_field({"id": 1, "title": "t"}) == "url"

    def test__find_missing_field__nulls_in_payload_order(self) -> None:
        payload = {"url": None, "id": None, "title": "t", "description": "d", "rating": 1}
        assert find_missing_field(payload) == "url"

    def test__find_missing_field__null_before_absent(self) -> None:
        # rating is present but null, id is absent; present keys are checked first
        payload = {"rating": None, "title": "t", "url": "u", "description": "d"}
        assert find_missing_field(payload) == "rating"

    def test__find_missing_field__ignores_unknown_keys(self) -> None:
        payload = {"extra": None, "id": 1, "title": "t", "url": "u", "description": "d",
                   "rating": 2}
        assert find_missing_field(payload) is None

    def test__find_missing_field__falsy_values_are_present(self) -> None:
        payload = {"id": 0, "title": "", "url": "", "description": "", "rating": 0}
        assert find_missing_field(payload) is None


class TestCoerceRating:
    """Tests for coerce_rating."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(5, 5), (5.0, 5), ("3", 3), ("4.5", 4.5), (2.25, 2.25)],
    )
    def test__coerce_rating(self, value: object, expected: float) -> None:
        result = coerce_rating(value)
        assert result == expected
        assert type(result) is type(expected)


def test__serialize_bookmark__exact_fields() -> None:
    bookmark = Bookmark(
        id=9, title="<b>T</b>", url="http://x.test", description="<b>D</b>", rating=3.0,
    )
    data = serialize_bookmark(bookmark).model_dump()
    assert data == {
        "id": 9,
        "title": "&lt;b&gt;T&lt;/b&gt;",
        "url": "http://x.test",
        "description": "<b>D</b>",
        "rating": 3,
    }
