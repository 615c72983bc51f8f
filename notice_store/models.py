"""Pydantic models and error types for the Notice store."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

MAX_ID_LENGTH = 100
MAX_TITLE_LENGTH = 200
MAX_DESCRIPTION_LENGTH = 1000
ID_PATTERN = r"^[A-Za-z0-9_-]+$"

U64_MAX = 2**64 - 1


class Notice(BaseModel):
    """A single notice.

    Instances are immutable. The store only builds them from input that
    already passed ``validate_notice``; the field constraints below repeat
    the same rules so a notice cannot exist in an invalid state.
    """

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: str = Field(
        ...,
        min_length=1,
        max_length=MAX_ID_LENGTH,
        pattern=ID_PATTERN,
        description="Unique notice id",
    )
    title: str = Field(
        ..., min_length=1, max_length=MAX_TITLE_LENGTH, description="Notice title"
    )
    description: str = Field(
        ...,
        min_length=1,
        max_length=MAX_DESCRIPTION_LENGTH,
        description="Notice body",
    )
    created_at: int = Field(
        ..., ge=0, le=U64_MAX, description="Creation time in nanoseconds"
    )
    updated_at: Optional[int] = Field(
        default=None, ge=0, le=U64_MAX, description="Last update time in nanoseconds"
    )
    is_active: bool = Field(default=True, description="Whether the notice is active")

    @model_validator(mode="after")
    def _check_timestamps(self) -> Notice:
        if self.updated_at is not None and self.updated_at < self.created_at:
            raise ValueError("updated_at cannot be earlier than created_at")
        return self


class Page(BaseModel):
    """One window of the key-ordered notice list."""

    model_config = ConfigDict(frozen=True)

    items: list[Notice] = Field(default_factory=list)
    total: int = Field(..., ge=0, description="Number of stored notices")


class NoticeErrorKind(StrEnum):
    NOT_FOUND = "NotFound"
    ALREADY_EXISTS = "AlreadyExists"
    INVALID_INPUT = "InvalidInput"
    CORRUPTED = "Corrupted"
    STORAGE_FAILURE = "StorageFailure"


@dataclass(frozen=True)
class NoticeError:
    """Operation-level failure: a closed kind plus a human-readable detail."""

    kind: NoticeErrorKind
    detail: str

    @classmethod
    def not_found(cls, notice_id: str) -> NoticeError:
        return cls(NoticeErrorKind.NOT_FOUND, f"Notice with ID {notice_id} not found")

    @classmethod
    def already_exists(cls, notice_id: str) -> NoticeError:
        return cls(
            NoticeErrorKind.ALREADY_EXISTS,
            f"Notice with ID {notice_id} already exists",
        )

    @classmethod
    def invalid_input(cls, reason: str) -> NoticeError:
        return cls(NoticeErrorKind.INVALID_INPUT, reason)

    @classmethod
    def corrupted(cls, notice_id: str, reason: str) -> NoticeError:
        return cls(
            NoticeErrorKind.CORRUPTED,
            f"Stored notice {notice_id} could not be decoded: {reason}",
        )

    @classmethod
    def storage_failure(cls, reason: str) -> NoticeError:
        return cls(NoticeErrorKind.STORAGE_FAILURE, reason)
