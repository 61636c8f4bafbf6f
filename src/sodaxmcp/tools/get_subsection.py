"""Tool handler for sodax_get_subsection.

Receives AppState, validates the subsection ID, looks it up across all
sections of the cached snapshot, and returns a structured dict. No MCP or
FastMCP imports — server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from sodaxmcp.errors import ErrorCode, SodaxError
from sodaxmcp.models.tools import GetSubsectionInput, SubsectionOutput

if TYPE_CHECKING:
    from sodaxmcp.state import AppState


async def handle(subsection_id: str, state: AppState) -> dict:
    """Handle a sodax_get_subsection tool call."""
    log = structlog.get_logger().bind(tool="sodax_get_subsection", subsection_id=subsection_id)
    log.info("handler_called")

    # Validate input
    try:
        validated = GetSubsectionInput(subsection_id=subsection_id)
    except ValueError as exc:
        raise SodaxError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a subsection ID in format X.Y, e.g. '3.1' for Tone of Voice.",
            recoverable=False,
        ) from exc

    if state.brand_bible is None:
        raise RuntimeError("Brand Bible components (fetcher, cache) not initialized")

    subsection = await state.brand_bible.get_subsection(validated.subsection_id)
    if subsection is None:
        available = ", ".join(state.taxonomy.subsection_ids)
        raise SodaxError(
            code=ErrorCode.SUBSECTION_NOT_FOUND,
            message=(
                f"Subsection '{validated.subsection_id}' not found.\n\n"
                f"Available subsections: {available}"
            ),
            suggestion="Call sodax_list_subsections for every subsection ID and title.",
            recoverable=False,
        )

    output = SubsectionOutput(
        id=subsection.id,
        title=subsection.title,
        content=subsection.content,
        source=state.settings.brand_bible.url,
    )
    return output.model_dump(mode="json")
