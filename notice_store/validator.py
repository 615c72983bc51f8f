"""Field validation for notices, search queries and pagination windows.

Every function here is pure: it inspects its arguments and returns
``Ok(None)`` or ``Err(ValidationError)``. The first violated rule wins.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum

from .models import (
    ID_PATTERN,
    MAX_DESCRIPTION_LENGTH,
    MAX_ID_LENGTH,
    MAX_TITLE_LENGTH,
)
from .result import Err, Ok, Result

_ID_RE = re.compile(ID_PATTERN)


class ValidationErrorKind(StrEnum):
    EMPTY_ID = "EmptyId"
    ID_TOO_LONG = "IdTooLong"
    ID_INVALID_CHARS = "IdInvalidChars"
    EMPTY_TITLE = "EmptyTitle"
    TITLE_TOO_LONG = "TitleTooLong"
    EMPTY_DESCRIPTION = "EmptyDescription"
    DESCRIPTION_TOO_LONG = "DescriptionTooLong"
    EMPTY_QUERY = "EmptyQuery"
    NEGATIVE_WINDOW = "NegativeWindow"
    INVALID_TEXT = "InvalidText"


@dataclass(frozen=True)
class ValidationError:
    kind: ValidationErrorKind
    message: str


def _fail(kind: ValidationErrorKind, message: str) -> Err[ValidationError]:
    return Err(ValidationError(kind, message))


def _is_unicode_text(value: str) -> bool:
    """False for strings holding lone surrogates, which have no UTF-8 form."""
    try:
        value.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def validate_notice(
    notice_id: str, title: str, description: str
) -> Result[None, ValidationError]:
    """Check id, title and description against the notice field rules.

    Lengths are measured on the trimmed values, which are also what the
    caller is expected to store.
    """
    notice_id = (notice_id or "").strip()
    title = (title or "").strip()
    description = (description or "").strip()

    if not notice_id:
        return _fail(ValidationErrorKind.EMPTY_ID, "ID cannot be empty")
    if len(notice_id) > MAX_ID_LENGTH:
        return _fail(
            ValidationErrorKind.ID_TOO_LONG,
            f"ID cannot exceed {MAX_ID_LENGTH} characters",
        )
    if not _ID_RE.fullmatch(notice_id):
        return _fail(
            ValidationErrorKind.ID_INVALID_CHARS,
            "ID can only contain alphanumeric characters, hyphens, and underscores",
        )
    if not title:
        return _fail(ValidationErrorKind.EMPTY_TITLE, "Title cannot be empty")
    if not _is_unicode_text(title):
        return _fail(
            ValidationErrorKind.INVALID_TEXT, "Title must be valid Unicode text"
        )
    if len(title) > MAX_TITLE_LENGTH:
        return _fail(
            ValidationErrorKind.TITLE_TOO_LONG,
            f"Title cannot exceed {MAX_TITLE_LENGTH} characters",
        )
    if not description:
        return _fail(
            ValidationErrorKind.EMPTY_DESCRIPTION, "Description cannot be empty"
        )
    if not _is_unicode_text(description):
        return _fail(
            ValidationErrorKind.INVALID_TEXT, "Description must be valid Unicode text"
        )
    if len(description) > MAX_DESCRIPTION_LENGTH:
        return _fail(
            ValidationErrorKind.DESCRIPTION_TOO_LONG,
            f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters",
        )
    return Ok(None)


def validate_query(query: str) -> Result[None, ValidationError]:
    """Reject empty or whitespace-only search queries."""
    if not query or not query.strip():
        return _fail(ValidationErrorKind.EMPTY_QUERY, "Search query cannot be empty")
    return Ok(None)


def validate_window(limit: int, offset: int) -> Result[None, ValidationError]:
    """Reject negative pagination parameters."""
    if limit < 0 or offset < 0:
        return _fail(
            ValidationErrorKind.NEGATIVE_WINDOW,
            "Limit and offset must be non-negative",
        )
    return Ok(None)
