"""Notice lifecycle operations over the ordered key-value map."""

from __future__ import annotations

import logging
import threading
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from .clock import Clock, SystemClock
from .codec import decode, encode
from .ids import generate_id
from .kvmap import StableMap, StableMapError, StorageWriteError
from .metrics import NOTICE_OPERATIONS, NOTICE_RECORDS
from .models import Notice, NoticeError, Page
from .result import Err, Ok, Result
from .validator import validate_notice, validate_query, validate_window

logger = logging.getLogger("notice_store.store")

DEFAULT_PAGE_LIMIT = 10


class NoticeStore:
    """Owns the notice map and exposes create/read/update/delete/list/search.

    Every public operation returns ``Ok`` or ``Err(NoticeError)`` and runs
    under a single lock, so no two operations interleave their map access.
    A failed operation never writes to the map.
    """

    def __init__(self, kv_map: StableMap, clock: Optional[Clock] = None) -> None:
        self._map = kv_map
        self._clock = clock or SystemClock()
        self._lock = threading.Lock()
        NOTICE_RECORDS.set(len(self._map))

    @property
    def count(self) -> int:
        """Number of stored notices."""
        return len(self._map)

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------

    def create(
        self,
        title: str,
        description: str,
        notice_id: Optional[str] = None,
        is_active: bool = True,
    ) -> Result[Notice, NoticeError]:
        """Create a notice under ``notice_id``, or under a generated id if omitted."""
        with self._lock:
            return self._track(
                "create", self._create(title, description, notice_id, is_active)
            )

    def update(
        self,
        notice_id: str,
        title: Optional[str] = None,
        description: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> Result[Notice, NoticeError]:
        """Merge the supplied fields into an existing notice.

        ``None`` means "keep the current value". The merged record is
        validated as a whole before it is written back.
        """
        with self._lock:
            return self._track(
                "update", self._update(notice_id, title, description, is_active)
            )

    def delete(self, notice_id: str) -> Result[str, NoticeError]:
        """Remove a notice. The id becomes free for reuse."""
        with self._lock:
            return self._track("delete", self._delete(notice_id.strip()))
    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------

    def get_by_id(self, notice_id: str) -> Result[Notice, NoticeError]:
        with self._lock:
            return self._track("get", self._read(notice_id.strip()))

    def list_all(self, active_only: bool = False) -> list[Notice]:
        """Every notice in key order; undecodable records are skipped and logged."""
        with self._lock:
            notices = []
            for key, raw in self._map.items():
                decoded = decode(raw)
                if isinstance(decoded, Err):
                    logger.error(
                        "Skipping corrupted notice %s: %s", key, decoded.error.detail
                    )
                    continue
                if active_only and not decoded.value.is_active:
                    continue
                notices.append(decoded.value)
            self._track("list_all", Ok(notices))
            return notices

    def list_page(
        self, limit: int = DEFAULT_PAGE_LIMIT, offset: int = 0
    ) -> Result[Page, NoticeError]:
        """Return at most ``limit`` notices starting at ``offset``, plus the total.

        Unlike ``list_all``, a corrupted record inside the window fails the
        whole call with ``Corrupted``, since a page with a silent gap would
        misreport its position against ``total``.
        """
        with self._lock:
            return self._track("list_page", self._list_page(limit, offset))

    def search(self, query: str) -> Result[list[Notice], NoticeError]:
        """Case-insensitive substring match on title and description.

        Every record is inspected, so any corrupted record fails the call
        with ``Corrupted`` rather than silently dropping a possible match.
        """
        with self._lock:
            return self._track("search", self._search(query))

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _create(
        self,
        title: str,
        description: str,
        notice_id: Optional[str],
        is_active: bool,
    ) -> Result[Notice, NoticeError]:
        if notice_id is None:
            notice_id = self._new_id()
        else:
            notice_id = notice_id.strip()
            if self._map.contains_key(notice_id):
                logger.warning("Rejected create: notice %s already exists", notice_id)
                return Err(NoticeError.already_exists(notice_id))

        check = validate_notice(notice_id, title, description)
        if isinstance(check, Err):
            logger.warning("Rejected create: %s", check.error.message)
            return Err(NoticeError.invalid_input(check.error.message))

        built = self._build(
            id=notice_id,
            title=title.strip(),
            description=description.strip(),
            created_at=self._clock.now(),
            updated_at=None,
            is_active=is_active,
        )
        if isinstance(built, Err):
            return built
        notice = built.value
        written = self._write(notice)
        if isinstance(written, Ok):
            logger.info("Created notice %s: '%s'", notice.id, notice.title)
        return written

    def _update(
        self,
        notice_id: str,
        title: Optional[str],
        description: Optional[str],
        is_active: Optional[bool],
    ) -> Result[Notice, NoticeError]:
        current = self._read(notice_id.strip())
        if isinstance(current, Err):
            return current
        existing = current.value

        new_title = title.strip() if title is not None else existing.title
        new_description = (
            description.strip() if description is not None else existing.description
        )
        check = validate_notice(existing.id, new_title, new_description)
        if isinstance(check, Err):
            logger.warning("Rejected update of %s: %s", notice_id, check.error.message)
            return Err(NoticeError.invalid_input(check.error.message))

        built = self._build(
            id=existing.id,
            title=new_title,
            description=new_description,
            created_at=existing.created_at,
            updated_at=max(self._clock.now(), existing.created_at),
            is_active=existing.is_active if is_active is None else is_active,
        )
        if isinstance(built, Err):
            return built
        notice = built.value
        written = self._write(notice)
        if isinstance(written, Ok):
            logger.info("Updated notice %s", notice.id)
        return written

    def _delete(self, notice_id: str) -> Result[str, NoticeError]:
        if not self._map.contains_key(notice_id):
            return Err(NoticeError.not_found(notice_id))
        try:
            self._map.remove(notice_id)
        except StableMapError as exc:
            logger.error("Failed to delete notice %s: %s", notice_id, exc)
            return Err(NoticeError.storage_failure(str(exc)))
        logger.info("Deleted notice %s", notice_id)
        return Ok(f"Notice with ID {notice_id} deleted successfully.")

    def _list_page(self, limit: int, offset: int) -> Result[Page, NoticeError]:
        check = validate_window(limit, offset)
        if isinstance(check, Err):
            return Err(NoticeError.invalid_input(check.error.message))

        keys = self._map.keys()
        items = []
        for key in keys[offset : offset + limit]:
            loaded = self._read(key)
            if isinstance(loaded, Err):
                return loaded
            items.append(loaded.value)
        return Ok(Page(items=items, total=len(keys)))

    def _search(self, query: str) -> Result[list[Notice], NoticeError]:
        check = validate_query(query)
        if isinstance(check, Err):
            return Err(NoticeError.invalid_input(check.error.message))

        term = query.strip().lower()
        matches = []
        for key in self._map.keys():
            loaded = self._read(key)
            if isinstance(loaded, Err):
                return loaded
            notice = loaded.value
            if term in notice.title.lower() or term in notice.description.lower():
                matches.append(notice)
        return Ok(matches)

    def _read(self, notice_id: str) -> Result[Notice, NoticeError]:
        raw = self._map.get(notice_id)
        if raw is None:
            return Err(NoticeError.not_found(notice_id))
        decoded = decode(raw)
        if isinstance(decoded, Err):
            logger.error(
                "Corrupted notice %s (%s): %s",
                notice_id,
                decoded.error.kind,
                decoded.error.detail,
            )
            return Err(NoticeError.corrupted(notice_id, decoded.error.detail))
        return Ok(decoded.value)

    def _write(self, notice: Notice) -> Result[Notice, NoticeError]:
        try:
            self._map.insert(notice.id, encode(notice))
        except StorageWriteError as exc:
            logger.error("Failed to write notice %s: %s", notice.id, exc)
            return Err(NoticeError.storage_failure(str(exc)))
        except StableMapError as exc:
            logger.warning("Rejected write of %s: %s", notice.id, exc)
            return Err(NoticeError.invalid_input(str(exc)))
        return Ok(notice)

    @staticmethod
    def _build(**fields) -> Result[Notice, NoticeError]:
        try:
            return Ok(Notice(**fields))
        except PydanticValidationError as exc:
            reason = exc.errors()[0]["msg"]
            logger.warning("Rejected notice %s: %s", fields.get("id"), reason)
            return Err(NoticeError.invalid_input(reason))

    def _new_id(self) -> str:
        notice_id = generate_id(self._clock)
        while self._map.contains_key(notice_id):
            notice_id = generate_id(self._clock)
        return notice_id

    def _track(self, operation: str, result: Result) -> Result:
        status = "success" if isinstance(result, Ok) else result.error.kind.value
        NOTICE_OPERATIONS.labels(operation=operation, status=status).inc()
        NOTICE_RECORDS.set(len(self._map))
        return result
