"""Tool handler for sodax_get_brand_overview.

Receives AppState, reads the cached Brand Bible snapshot, and returns a
structured dict. No MCP or FastMCP imports — server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from sodaxmcp.models.tools import BrandOverviewOutput, SectionSummary

if TYPE_CHECKING:
    from sodaxmcp.state import AppState

BRAND_BIBLE_SUMMARY = (
    "This Brand Bible defines how SODAX should be represented externally. It sets the "
    "foundations for positioning, voice, and visual expression across all public contexts."
)


async def handle(state: AppState) -> dict:
    """Handle a sodax_get_brand_overview tool call."""
    log = structlog.get_logger().bind(tool="sodax_get_brand_overview")
    log.info("handler_called")

    if state.brand_bible is None:
        raise RuntimeError("Brand Bible components (fetcher, cache) not initialized")

    document = await state.brand_bible.get_document()

    output = BrandOverviewOutput(
        version=document.version,
        last_updated=document.last_updated,
        source=state.settings.brand_bible.url,
        sections=[
            SectionSummary(id=s.id, title=s.title, subsection_count=len(s.subsections))
            for s in document.sections
        ],
        summary=BRAND_BIBLE_SUMMARY,
        fetched_at=document.fetched_at,
    )
    return output.model_dump(mode="json")
