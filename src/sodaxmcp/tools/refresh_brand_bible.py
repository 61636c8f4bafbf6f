"""Tool handler for sodax_refresh_brand_bible.

Forces a rebuild of the cached snapshot from the network. No MCP or FastMCP
imports — server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from sodaxmcp.models.tools import RefreshOutput

if TYPE_CHECKING:
    from sodaxmcp.state import AppState


async def handle(state: AppState) -> dict:
    """Handle a sodax_refresh_brand_bible tool call."""
    log = structlog.get_logger().bind(tool="sodax_refresh_brand_bible")
    log.info("handler_called")

    if state.brand_bible is None:
        raise RuntimeError("Brand Bible components (fetcher, cache) not initialized")

    document = await state.brand_bible.refresh()
    log.info(
        "refresh_complete",
        version=document.version,
        fetched_at=document.fetched_at.isoformat(),
    )

    output = RefreshOutput(
        version=document.version,
        last_updated=document.last_updated,
        fetched_at=document.fetched_at,
        source=state.settings.brand_bible.url,
    )
    return output.model_dump(mode="json")
