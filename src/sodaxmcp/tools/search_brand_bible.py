"""Tool handler for sodax_search_brand_bible.

Receives AppState, runs the lexical search over the cached snapshot, applies
the caller's limit, and returns a structured dict. No MCP or FastMCP
imports — server.py handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from sodaxmcp import scorer
from sodaxmcp.errors import ErrorCode, SodaxError
from sodaxmcp.models.tools import SearchBrandBibleInput, SearchBrandBibleOutput

if TYPE_CHECKING:
    from sodaxmcp.state import AppState


async def handle(query: str, limit: int, state: AppState) -> dict:
    """Handle a sodax_search_brand_bible tool call."""
    log = structlog.get_logger().bind(tool="sodax_search_brand_bible", query=query)
    log.info("handler_called")

    # Validate input
    try:
        validated = SearchBrandBibleInput(query=query, limit=limit)
    except ValueError as exc:
        raise SodaxError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Provide a query of 2-200 characters and a limit between 1 and 20.",
            recoverable=False,
        ) from exc

    if state.brand_bible is None:
        raise RuntimeError("Brand Bible components (fetcher, cache) not initialized")

    document = await state.brand_bible.get_document()
    results = scorer.search(document, validated.query)
    log.info("search_complete", match_count=len(results))

    output = SearchBrandBibleOutput(
        query=validated.query,
        results=results[: validated.limit],
        total_results=len(results),
        source=state.settings.brand_bible.url,
        last_updated=document.last_updated,
    )
    return output.model_dump(mode="json")
