"""
Notice Store MCP Server

Exposes tools for creating, reading, updating, deleting, paging and
searching notices via the Model Context Protocol.  Runs with SSE transport.
"""

import logging

from mcp.server.fastmcp import FastMCP

from .codec import max_encoded_size
from .config import Settings
from .kvmap import StableMap
from .store import NoticeStore
from .tools import SERVER_NAME, NoticeTools

logger = logging.getLogger("notice_store")


def build_store(settings: Settings) -> NoticeStore:
    """Open the notice map described by ``settings`` and wrap it in a store."""
    if settings.max_value_size < max_encoded_size():
        logger.warning(
            "max_value_size=%d is below the largest possible notice (%d bytes); "
            "long notices will be rejected",
            settings.max_value_size,
            max_encoded_size(),
        )
    kv_map = StableMap(
        path=settings.data_path,
        max_key_size=settings.max_key_size,
        max_value_size=settings.max_value_size,
    )
    return NoticeStore(kv_map)


def build_server(store: NoticeStore, settings: Settings) -> FastMCP:
    """Register every notice tool for ``store`` on a new FastMCP server."""
    mcp = FastMCP(SERVER_NAME, host=settings.host, port=settings.port)
    for handler in NoticeTools(store).handlers():
        mcp.add_tool(handler, name=handler.__name__)
    return mcp


def main() -> None:
    settings = Settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s | %(name)s | %(levelname)s | %(message)s",
    )
    store = build_store(settings)
    mcp = build_server(store, settings)
    logger.info("Starting Notice Store MCP server on port %d ...", settings.port)
    mcp.run(transport="sse")


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    main()
