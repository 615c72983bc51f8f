"""Byte codec for notices stored in the key-value map.

A notice is written as a compact UTF-8 JSON object with a fixed key order.
Timestamps are decimal strings so no JSON reader can round them through a
double, and a missing ``updatedAt`` is written as an explicit ``null``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from .models import (
    MAX_DESCRIPTION_LENGTH,
    MAX_ID_LENGTH,
    MAX_TITLE_LENGTH,
    U64_MAX,
    Notice,
)
from .result import Err, Ok, Result

REQUIRED_FIELDS = ("id", "title", "description", "createdAt")

# Worst case bytes per character once JSON-escaped (control chars -> \u00XX).
_MAX_BYTES_PER_CHAR = 6


class DecodeErrorKind(StrEnum):
    MALFORMED_PAYLOAD = "MalformedPayload"
    MISSING_FIELD = "MissingField"


@dataclass(frozen=True)
class DecodeError:
    kind: DecodeErrorKind
    detail: str


def _malformed(detail: str) -> Err[DecodeError]:
    return Err(DecodeError(DecodeErrorKind.MALFORMED_PAYLOAD, detail))


def encode(notice: Notice) -> bytes:
    """Serialize a notice to its deterministic byte form."""
    data = {
        "id": notice.id,
        "title": notice.title,
        "description": notice.description,
        "createdAt": str(notice.created_at),
        "updatedAt": str(notice.updated_at) if notice.updated_at is not None else None,
        "isActive": notice.is_active,
    }
    return json.dumps(data, ensure_ascii=False, separators=(",", ":")).encode("utf-8")


def max_encoded_size() -> int:
    """Upper bound on ``len(encode(n))`` for any valid notice."""
    skeleton = Notice(
        id="x",
        title="x",
        description="x",
        created_at=U64_MAX,
        updated_at=U64_MAX,
        is_active=False,
    )
    overhead = len(encode(skeleton)) - 3
    text_chars = MAX_ID_LENGTH + MAX_TITLE_LENGTH + MAX_DESCRIPTION_LENGTH
    return overhead + text_chars * _MAX_BYTES_PER_CHAR


def _parse_timestamp(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return int(value)
    return None


def decode(data: bytes) -> Result[Notice, DecodeError]:
    """Rebuild a notice from bytes produced by :func:`encode`.

    ``isActive`` falls back to ``True`` when absent so records written
    before the flag existed still load.
    """
    try:
        raw = json.loads(data.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        return _malformed(f"payload is not valid JSON: {exc}")

    if not isinstance(raw, dict):
        return _malformed(f"expected a JSON object, got {type(raw).__name__}")

    missing = [name for name in REQUIRED_FIELDS if name not in raw]
    if missing:
        return Err(
            DecodeError(
                DecodeErrorKind.MISSING_FIELD,
                f"missing required field(s): {', '.join(missing)}",
            )
        )

    created_at = _parse_timestamp(raw["createdAt"])
    if created_at is None:
        return _malformed(f"createdAt is not a decimal timestamp: {raw['createdAt']!r}")

    updated_raw = raw.get("updatedAt")
    updated_at = None
    if updated_raw is not None:
        updated_at = _parse_timestamp(updated_raw)
        if updated_at is None:
            return _malformed(f"updatedAt is not a decimal timestamp: {updated_raw!r}")

    is_active = raw.get("isActive")
    if is_active is None:
        is_active = True
    elif not isinstance(is_active, bool):
        return _malformed(f"isActive is not a boolean: {is_active!r}")

    try:
        notice = Notice(
            id=raw["id"],
            title=raw["title"],
            description=raw["description"],
            created_at=created_at,
            updated_at=updated_at,
            is_active=is_active,
        )
    except PydanticValidationError as exc:
        return _malformed(f"stored fields are invalid: {exc.error_count()} error(s)")
    return Ok(notice)
