"""Tool handler for sodax_get_section.

Receives AppState, validates the section ID, looks it up in the cached
snapshot, and returns a structured dict. No MCP or FastMCP imports —
server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from sodaxmcp.brand_bible import find_section
from sodaxmcp.errors import ErrorCode, SodaxError
from sodaxmcp.models.tools import GetSectionInput, SectionOutput

if TYPE_CHECKING:
    from sodaxmcp.state import AppState


async def handle(section_id: str, state: AppState) -> dict:
    """Handle a sodax_get_section tool call."""
    log = structlog.get_logger().bind(tool="sodax_get_section", section_id=section_id)
    log.info("handler_called")

    # Validate input
    try:
        validated = GetSectionInput(section_id=section_id)
    except ValueError as exc:
        raise SodaxError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a section number such as '3'.",
            recoverable=False,
        ) from exc

    if state.brand_bible is None:
        raise RuntimeError("Brand Bible components (fetcher, cache) not initialized")

    document = await state.brand_bible.get_document()
    section = find_section(document, validated.section_id)
    if section is None:
        valid_ids = ", ".join(state.taxonomy.section_ids)
        raise SodaxError(
            code=ErrorCode.SECTION_NOT_FOUND,
            message=f"Section '{validated.section_id}' not found. Valid sections are {valid_ids}.",
            suggestion="Call sodax_get_brand_overview to see all sections.",
            recoverable=False,
        )

    output = SectionOutput(
        section_id=section.id,
        title=section.title,
        content=section.content,
        subsections=list(section.subsections),
        source=state.settings.brand_bible.url,
        last_updated=document.last_updated,
    )
    return output.model_dump(mode="json")
