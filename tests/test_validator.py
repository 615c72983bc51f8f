"""Tests for notice field validation."""

import pytest

from notice_store.result import Err, Ok
from notice_store.validator import (
    ValidationErrorKind,
    validate_notice,
    validate_query,
    validate_window,
)


def _kind(result) -> ValidationErrorKind:
    assert isinstance(result, Err)
    return result.error.kind


class TestValidateNotice:
    def test_valid_input(self):
        assert validate_notice("ok-id_1", "Title", "Body") == Ok(None)

    def test_maximum_lengths_accepted(self):
        assert isinstance(validate_notice("a" * 100, "t" * 200, "d" * 1000), Ok)

    def test_surrounding_whitespace_is_ignored(self):
        assert isinstance(validate_notice("  n1  ", "  Title ", "\tBody\n"), Ok)

    @pytest.mark.parametrize("notice_id", ["", "   ", "\n"])
    def test_empty_id(self, notice_id):
        result = validate_notice(notice_id, "t", "d")
        assert _kind(result) == ValidationErrorKind.EMPTY_ID

    def test_id_too_long(self):
        result = validate_notice("a" * 101, "t", "d")
        assert _kind(result) == ValidationErrorKind.ID_TOO_LONG
        assert "100" in result.error.message

    @pytest.mark.parametrize("notice_id", ["bad id!", "a.b", "naïve", "x/y", "a b"])
    def test_id_invalid_chars(self, notice_id):
        result = validate_notice(notice_id, "t", "d")
        assert _kind(result) == ValidationErrorKind.ID_INVALID_CHARS

    def test_empty_title(self):
        result = validate_notice("n1", "  ", "d")
        assert _kind(result) == ValidationErrorKind.EMPTY_TITLE

    def test_title_too_long(self):
        result = validate_notice("n1", "t" * 201, "d")
        assert _kind(result) == ValidationErrorKind.TITLE_TOO_LONG

    def test_title_length_measured_after_trim(self):
        assert isinstance(validate_notice("n1", " " + "t" * 200 + " ", "d"), Ok)

    def test_empty_description(self):
        result = validate_notice("n1", "t", "")
        assert _kind(result) == ValidationErrorKind.EMPTY_DESCRIPTION

    def test_description_too_long(self):
        result = validate_notice("n1", "t", "d" * 1001)
        assert _kind(result) == ValidationErrorKind.DESCRIPTION_TOO_LONG

    @pytest.mark.parametrize(
        "title, description, message",
        [
            ("bad \ud800 title", "d", "Title must be valid Unicode text"),
            ("t", "\udfff", "Description must be valid Unicode text"),
        ],
    )
    def test_lone_surrogate_rejected(self, title, description, message):
        result = validate_notice("n1", title, description)
        assert _kind(result) == ValidationErrorKind.INVALID_TEXT
        assert result.error.message == message

    def test_lone_surrogate_in_id(self):
        result = validate_notice("n\ud8001", "t", "d")
        assert _kind(result) == ValidationErrorKind.ID_INVALID_CHARS

    def test_astral_characters_accepted(self):
        assert isinstance(validate_notice("n1", "Party \U0001f389", "d"), Ok)

    def test_first_violation_wins(self):
        result = validate_notice("", "", "")
        assert _kind(result) == ValidationErrorKind.EMPTY_ID


class TestValidateQuery:
    def test_valid_query(self):
        assert validate_query("office") == Ok(None)

    @pytest.mark.parametrize("query", ["", "   "])
    def test_empty_query(self, query):
        assert _kind(validate_query(query)) == ValidationErrorKind.EMPTY_QUERY


class TestValidateWindow:
    def test_zero_is_allowed(self):
        assert validate_window(0, 0) == Ok(None)

    @pytest.mark.parametrize("limit, offset", [(-1, 0), (0, -1), (-5, -5)])
    def test_negative_values(self, limit, offset):
        result = validate_window(limit, offset)
        assert _kind(result) == ValidationErrorKind.NEGATIVE_WINDOW
        assert result.error.message == "Limit and offset must be non-negative"
