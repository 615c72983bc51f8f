"""MCP tool handlers for the Notice store.

Each handler turns a store outcome into a JSON-able dict with a ``status``
of ``"success"`` or ``"error"``, the way the tools report back to clients.
"""

import logging
from datetime import UTC, datetime
from typing import Any

from .models import Notice, NoticeError
from .result import Err
from .store import DEFAULT_PAGE_LIMIT, NoticeStore

logger = logging.getLogger("notice_store.tools")

SERVER_NAME = "notice-store"


def _error(error: NoticeError) -> dict[str, Any]:
    return {"status": "error", "error": error.kind.value, "message": error.detail}


def _dump(notices: list[Notice]) -> list[dict[str, Any]]:
    return [n.model_dump() for n in notices]


class NoticeTools:
    """Tool surface over a single :class:`NoticeStore` instance."""

    def __init__(self, store: NoticeStore) -> None:
        self._store = store

    def create_notice(
        self,
        title: str,
        description: str,
        notice_id: str | None = None,
        is_active: bool = True,
    ) -> dict:
        """Create a new notice.

        Use this tool to publish a short announcement. If no id is given,
        a unique one is generated.

        Args:
            title: Short title, 1-200 characters.
            description: Notice body, 1-1000 characters.
            notice_id: Optional id (letters, digits, '-' and '_', max 100).
            is_active: Whether the notice starts active.

        Returns:
            Dictionary with the created notice, or an error.
        """
        result = self._store.create(title, description, notice_id, is_active)
        logger.info("Tool create_notice invoked: ok=%s", result.ok)
        if isinstance(result, Err):
            return _error(result.error)
        return {
            "status": "success",
            "notice": result.value.model_dump(),
            "message": f"Notice with ID {result.value.id} created successfully.",
        }

    def get_notice_by_id(self, notice_id: str) -> dict:
        """Fetch a single notice by its id.

        Args:
            notice_id: The notice id.

        Returns:
            Dictionary with the notice, or a NotFound error.
        """
        result = self._store.get_by_id(notice_id)
        logger.info(
            "Tool get_notice_by_id invoked: id=%s ok=%s", notice_id, result.ok
        )
        if isinstance(result, Err):
            return _error(result.error)
        return {"status": "success", "notice": result.value.model_dump()}

    def update_notice(
        self,
        notice_id: str,
        title: str | None = None,
        description: str | None = None,
        is_active: bool | None = None,
    ) -> dict:
        """Update fields of an existing notice. Omitted fields are kept.

        Args:
            notice_id: The notice id.
            title: New title, if changing it.
            description: New description, if changing it.
            is_active: New active flag, if changing it.

        Returns:
            Dictionary with the updated notice, or an error.
        """
        result = self._store.update(notice_id, title, description, is_active)
        logger.info("Tool update_notice invoked: id=%s ok=%s", notice_id, result.ok)
        if isinstance(result, Err):
            return _error(result.error)
        return {
            "status": "success",
            "notice": result.value.model_dump(),
            "message": f"Notice with ID {notice_id} updated successfully.",
        }

    def delete_notice(self, notice_id: str) -> dict:
        """Delete a notice permanently.

        Args:
            notice_id: The notice id.

        Returns:
            Dictionary with a confirmation message, or a NotFound error.
        """
        result = self._store.delete(notice_id)
        logger.info("Tool delete_notice invoked: id=%s ok=%s", notice_id, result.ok)
        if isinstance(result, Err):
            return _error(result.error)
        return {"status": "success", "message": result.value}

    def get_all_notices(self, active_only: bool = False) -> dict:
        """List every stored notice, ordered by id.

        Args:
            active_only: Only return notices that are still active.

        Returns:
            Dictionary with the notices and their count.
        """
        notices = self._store.list_all(active_only=active_only)
        logger.info("Tool get_all_notices invoked: found=%d", len(notices))
        return {"status": "success", "count": len(notices), "notices": _dump(notices)}

    def get_notices(self, limit: int = DEFAULT_PAGE_LIMIT, offset: int = 0) -> dict:
        """List one page of notices, ordered by id.

        Args:
            limit: Maximum number of notices to return.
            offset: Number of notices to skip.

        Returns:
            Dictionary with the page of notices and the total count.
        """
        result = self._store.list_page(limit, offset)
        logger.info("Tool get_notices invoked: limit=%d offset=%d", limit, offset)
        if isinstance(result, Err):
            return _error(result.error)
        page = result.value
        return {
            "status": "success",
            "notices": _dump(page.items),
            "total": page.total,
            "limit": limit,
            "offset": offset,
        }

    def search_notices(self, query: str) -> dict:
        """Search notices by keyword (case-insensitive, title and description).

        Args:
            query: Text to look for.

        Returns:
            Dictionary with matching notices and their count.
        """
        result = self._store.search(query)
        if isinstance(result, Err):
            return _error(result.error)
        logger.info(
            "Tool search_notices invoked: query='%s', found=%d",
            query,
            len(result.value),
        )
        return {
            "status": "success",
            "count": len(result.value),
            "notices": _dump(result.value),
        }

    def health_check(self) -> dict:
        """Check whether the Notice store server is healthy.

        Returns:
            Dictionary with server status, notice count, and timestamp.
        """
        logger.info("Tool health_check invoked")
        return {
            "status": "healthy",
            "server": SERVER_NAME,
            "total_notices": self._store.count,
            "timestamp": datetime.now(UTC).isoformat(),
        }

    def handlers(self) -> list:
        """Bound handlers in registration order."""
        return [
            self.create_notice,
            self.get_notice_by_id,
            self.update_notice,
            self.delete_notice,
            self.get_all_notices,
            self.get_notices,
            self.search_notices,
            self.health_check,
        ]
