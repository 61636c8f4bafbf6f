"""MCP server entrypoint.

Responsibilities (and nothing more):
- Configure structlog
- Build the process-wide AppState and hand it to every session via the
  FastMCP lifespan context manager
- Register tools and the HTTP info routes
- Start the correct transport (stdio or HTTP) and close shared resources
  when it stops
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import TYPE_CHECKING

import structlog
from mcp.server.fastmcp import Context, FastMCP
from mcp.server.transport_security import TransportSecuritySettings
from mcp.types import CallToolResult, TextContent, ToolAnnotations
from starlette.responses import JSONResponse

import sodaxmcp.tools.get_brand_overview as t_overview
import sodaxmcp.tools.get_section as t_section
import sodaxmcp.tools.get_subsection as t_subsection
import sodaxmcp.tools.list_subsections as t_list
import sodaxmcp.tools.refresh_brand_bible as t_refresh
import sodaxmcp.tools.search_brand_bible as t_search
import sodaxmcp.tools.sodax_api as t_api
from sodaxmcp import __version__, formatting
from sodaxmcp.api_client import SodaxApiClient
from sodaxmcp.brand_bible import BrandBible
from sodaxmcp.cache import DocumentCache
from sodaxmcp.config import Settings
from sodaxmcp.errors import SodaxError
from sodaxmcp.fetcher import DocumentFetcher, build_http_client
from sodaxmcp.models.tools import ResponseFormat
from sodaxmcp.state import AppState, SharedAppState
from sodaxmcp.taxonomy import BRAND_BIBLE_TAXONOMY
from sodaxmcp.transport import run_http_server

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Awaitable, Callable

    from starlette.requests import Request

log = structlog.get_logger()

SERVICE_NAME = "sodaxmcp"

BRAND_BIBLE_TOOLS = [
    "sodax_get_brand_overview",
    "sodax_get_section",
    "sodax_get_subsection",
    "sodax_search_brand_bible",
    "sodax_refresh_brand_bible",
    "sodax_list_subsections",
]
SODAX_API_TOOLS = [
    "sodax_get_supported_chains",
    "sodax_get_swap_tokens",
    "sodax_get_transaction",
    "sodax_get_user_transactions",
    "sodax_get_volume",
    "sodax_get_orderbook",
    "sodax_get_money_market_assets",
    "sodax_get_user_position",
    "sodax_get_partners",
    "sodax_get_token_supply",
]

_MARKDOWN = ResponseFormat.MARKDOWN.value


# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr — stdout is reserved for the MCP JSON-RPC stream
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


# ---------------------------------------------------------------------------
# Composition root and lifespan
# ---------------------------------------------------------------------------


def _load_settings() -> Settings:
    settings = Settings()
    _setup_logging(settings)
    return settings


def build_state(settings: Settings) -> AppState:
    """Wire the Brand Bible pipeline and the API client around one HTTP client."""
    http_client = build_http_client(settings.brand_bible)
    fetcher = DocumentFetcher(http_client, settings.brand_bible)
    cache = DocumentCache(
        fetcher,
        ttl_seconds=settings.brand_bible.ttl_seconds,
        taxonomy=BRAND_BIBLE_TAXONOMY,
    )

    state = AppState(
        settings=settings,
        taxonomy=BRAND_BIBLE_TAXONOMY,
        http_client=http_client,
        fetcher=fetcher,
        cache=cache,
        brand_bible=BrandBible(cache),
        api_client=SodaxApiClient(http_client, settings.api),
    )

    log.info(
        "server_started",
        version=__version__,
        transport=settings.server.transport,
        source=settings.brand_bible.url,
        cache_ttl_seconds=settings.brand_bible.ttl_seconds,
    )
    return state


def make_lifespan(
    shared: SharedAppState,
) -> Callable[[FastMCP], AbstractAsyncContextManager[AppState]]:
    """Build a FastMCP lifespan that yields ``shared``'s AppState.

    Streamable HTTP enters the lifespan once per MCP session. Leaving it
    releases nothing; ``shared.aclose()`` runs when the transport stops.
    """

    @asynccontextmanager
    async def lifespan(server: FastMCP) -> AsyncGenerator[AppState, None]:
        state = shared.get()
        log.debug("session_started")
        yield state
        log.debug("session_ended")

    return lifespan


_shared_state = SharedAppState(_load_settings, build_state)


# ---------------------------------------------------------------------------
# FastMCP instance and tool registration
# ---------------------------------------------------------------------------

mcp = FastMCP(
    SERVICE_NAME,
    lifespan=make_lifespan(_shared_state),
    # Host and Origin checks live in MCPSecurityMiddleware; the SDK default only
    # admits localhost, which would reject the public hostname.
    transport_security=TransportSecuritySettings(enable_dns_rebinding_protection=False),
)
# FastMCP doesn't expose a version kwarg — set it on the underlying Server
# so the MCP initialize handshake reports our version, not the SDK's.
mcp._mcp_server.version = __version__  # pyright: ignore[reportPrivateUsage]

_READ_ONLY = ToolAnnotations(
    readOnlyHint=True,
    destructiveHint=False,
    idempotentHint=True,
    openWorldHint=False,
)


def _serialise_tool_error(error: SodaxError) -> CallToolResult:
    """Convert a SodaxError to the MCP tool error result envelope."""
    return CallToolResult(
        content=[TextContent(type="text", text=json.dumps(error.to_dict()))],
        isError=True,
    )


async def _run_tool(
    tool: str,
    call: Awaitable[dict],
    response_format: str,
    render: Callable[[dict], str],
    *,
    truncation_hint: str | None = None,
) -> CallToolResult:
    """Await a handler and render its payload, or turn SodaxError into a tool error.

    The text content is markdown or indented JSON depending on
    ``response_format``; the payload itself always goes out as structured
    content. With ``truncation_hint`` the text is capped at CHARACTER_LIMIT.
    """
    try:
        payload = await call
        output_format = formatting.parse_response_format(response_format)
    except SodaxError as exc:
        log.warning(
            "tool_error",
            tool=tool,
            code=exc.code,
            message=exc.message,
            recoverable=exc.recoverable,
        )
        return _serialise_tool_error(exc)
    except Exception:
        log.error("tool_unexpected_error", tool=tool, exc_info=True)
        raise

    if output_format is ResponseFormat.MARKDOWN:
        text = render(payload)
    else:
        text = formatting.render_json(payload)
    if truncation_hint is not None:
        text = formatting.truncate(text, formatting.CHARACTER_LIMIT, truncation_hint)

    return CallToolResult(
        content=[TextContent(type="text", text=text)],
        structuredContent=payload,
    )


def _state(ctx: Context) -> AppState:
    return ctx.request_context.lifespan_context


# Brand Bible -----------------------------------------------------------------


@mcp.tool(annotations=_READ_ONLY)
async def sodax_get_brand_overview(ctx: Context, response_format: str = _MARKDOWN) -> object:
    """Get an overview of the SODAX Brand Bible: version, last update and all
    sections with their subsection counts. Use this first to learn the structure.
    response_format is 'markdown' (default) or 'json'."""
    return await _run_tool(
        "sodax_get_brand_overview",
        t_overview.handle(_state(ctx)),
        response_format,
        formatting.render_overview,
    )


@mcp.tool(annotations=_READ_ONLY)
async def sodax_get_section(
    section_id: str, ctx: Context, response_format: str = _MARKDOWN
) -> object:
    """Get one Brand Bible section with all of its subsections.

    Sections: 1=Brand Essence, 2=Positioning, 3=Verbal Identity,
    4=Visual Identity, 5=Channels, 6=Partnerships. Long sections are
    truncated; use sodax_get_subsection for the full text of one part.
    response_format is 'markdown' (default) or 'json'.
    """
    return await _run_tool(
        "sodax_get_section",
        t_section.handle(section_id, _state(ctx)),
        response_format,
        formatting.render_section,
        truncation_hint=formatting.SECTION_TRUNCATION_HINT,
    )


@mcp.tool(annotations=_READ_ONLY)
async def sodax_get_subsection(
    subsection_id: str, ctx: Context, response_format: str = _MARKDOWN
) -> object:
    """Get one Brand Bible subsection by ID in format X.Y, e.g. '3.1' for Tone of
    Voice or '4.2' for the Color Palette. response_format is 'markdown'
    (default) or 'json'."""
    return await _run_tool(
        "sodax_get_subsection",
        t_subsection.handle(subsection_id, _state(ctx)),
        response_format,
        formatting.render_subsection,
    )


@mcp.tool(annotations=_READ_ONLY)
async def sodax_search_brand_bible(
    query: str, ctx: Context, limit: int = 5, response_format: str = _MARKDOWN
) -> object:
    """Search all Brand Bible sections and subsections by keywords such as
    'logo usage', 'tone of voice' or 'B2B messaging'. Returns the best matches
    ranked by relevance; limit is 1-20. response_format is 'markdown'
    (default) or 'json'."""
    return await _run_tool(
        "sodax_search_brand_bible",
        t_search.handle(query, limit, _state(ctx)),
        response_format,
        formatting.render_search,
    )


@mcp.tool(
    annotations=ToolAnnotations(
        readOnlyHint=False,
        destructiveHint=False,
        idempotentHint=True,
        openWorldHint=False,
    )
)
async def sodax_refresh_brand_bible(ctx: Context, response_format: str = _MARKDOWN) -> object:
    """Force a refresh of the cached Brand Bible. The document is otherwise
    cached for 5 minutes."""
    return await _run_tool(
        "sodax_refresh_brand_bible",
        t_refresh.handle(_state(ctx)),
        response_format,
        formatting.render_refresh,
    )


@mcp.tool(annotations=_READ_ONLY)
async def sodax_list_subsections(ctx: Context, response_format: str = _MARKDOWN) -> object:
    """List every Brand Bible subsection ID and title, grouped by section."""
    return await _run_tool(
        "sodax_list_subsections",
        t_list.handle(_state(ctx)),
        response_format,
        formatting.render_subsection_list,
    )


# SODAX API -------------------------------------------------------------------


@mcp.tool(annotations=_READ_ONLY)
async def sodax_get_supported_chains(ctx: Context, response_format: str = _MARKDOWN) -> object:
    """List the blockchain networks supported by SODAX."""
    return await _run_tool(
        "sodax_get_supported_chains",
        t_api.handle_supported_chains(_state(ctx)),
        response_format,
        formatting.render_chains,
    )


@mcp.tool(annotations=_READ_ONLY)
async def sodax_get_swap_tokens(
    ctx: Context, chain_id: int | None = None, response_format: str = _MARKDOWN
) -> object:
    """List tokens available for swapping on SODAX, optionally for one chain ID."""
    return await _run_tool(
        "sodax_get_swap_tokens",
        t_api.handle_swap_tokens(chain_id, _state(ctx)),
        response_format,
        formatting.render_swap_tokens,
    )


@mcp.tool(annotations=_READ_ONLY)
async def sodax_get_transaction(
    tx_hash: str, ctx: Context, response_format: str = _MARKDOWN
) -> object:
    """Look up a SODAX transaction (intent) by its transaction hash."""
    return await _run_tool(
        "sodax_get_transaction",
        t_api.handle_transaction(tx_hash, _state(ctx)),
        response_format,
        formatting.render_transaction,
    )


@mcp.tool(annotations=_READ_ONLY)
async def sodax_get_user_transactions(
    user_address: str, ctx: Context, response_format: str = _MARKDOWN
) -> object:
    """List the SODAX transaction history of a wallet address."""
    return await _run_tool(
        "sodax_get_user_transactions",
        t_api.handle_user_transactions(user_address, _state(ctx)),
        response_format,
        formatting.render_user_transactions,
    )


@mcp.tool(annotations=_READ_ONLY)
async def sodax_get_volume(
    ctx: Context, limit: int = 20, response_format: str = _MARKDOWN
) -> object:
    """Get recent SODAX solver volume records (limit 1-100)."""
    return await _run_tool(
        "sodax_get_volume",
        t_api.handle_volume(limit, _state(ctx)),
        response_format,
        formatting.render_volume,
    )


@mcp.tool(annotations=_READ_ONLY)
async def sodax_get_orderbook(ctx: Context, response_format: str = _MARKDOWN) -> object:
    """Get the current SODAX solver orderbook."""
    return await _run_tool(
        "sodax_get_orderbook",
        t_api.handle_orderbook(_state(ctx)),
        response_format,
        formatting.render_orderbook,
    )


@mcp.tool(annotations=_READ_ONLY)
async def sodax_get_money_market_assets(
    ctx: Context, response_format: str = _MARKDOWN
) -> object:
    """List all assets in the SODAX money market."""
    return await _run_tool(
        "sodax_get_money_market_assets",
        t_api.handle_money_market_assets(_state(ctx)),
        response_format,
        formatting.render_money_market_assets,
    )


@mcp.tool(annotations=_READ_ONLY)
async def sodax_get_user_position(
    user_address: str, ctx: Context, response_format: str = _MARKDOWN
) -> object:
    """Get the money market position of a wallet address."""
    return await _run_tool(
        "sodax_get_user_position",
        t_api.handle_user_position(user_address, _state(ctx)),
        response_format,
        formatting.render_user_position,
    )


@mcp.tool(annotations=_READ_ONLY)
async def sodax_get_partners(ctx: Context, response_format: str = _MARKDOWN) -> object:
    """List SODAX integration partners."""
    return await _run_tool(
        "sodax_get_partners",
        t_api.handle_partners(_state(ctx)),
        response_format,
        formatting.render_partners,
    )


@mcp.tool(annotations=_READ_ONLY)
async def sodax_get_token_supply(ctx: Context, response_format: str = _MARKDOWN) -> object:
    """Get total and circulating supply of the SODA token."""
    return await _run_tool(
        "sodax_get_token_supply",
        t_api.handle_token_supply(_state(ctx)),
        response_format,
        formatting.render_token_supply,
    )


# ---------------------------------------------------------------------------
# HTTP info routes
# ---------------------------------------------------------------------------


@mcp.custom_route("/health", methods=["GET"])
async def health(request: Request) -> JSONResponse:
    return JSONResponse({"status": "healthy", "service": SERVICE_NAME, "version": __version__})


@mcp.custom_route("/api", methods=["GET"])
async def api_info(request: Request) -> JSONResponse:
    settings = _shared_state.settings
    return JSONResponse(
        {
            "name": SERVICE_NAME,
            "version": __version__,
            "description": "MCP server for SODAX - brand guidelines and API data",
            "endpoints": {"mcp": "/mcp", "health": "/health", "api": "/api"},
            "sources": {
                "brandBible": {"source": settings.brand_bible.url, "tools": BRAND_BIBLE_TOOLS},
                "sodaxApi": {"source": settings.api.docs_url, "tools": SODAX_API_TOOLS},
            },
        }
    )


# ---------------------------------------------------------------------------
# Entrypoint
# ---------------------------------------------------------------------------


async def _run_stdio() -> None:
    try:
        await mcp.run_stdio_async()
    finally:
        await _shared_state.aclose()


def main() -> None:
    settings = _shared_state.settings
    log.info("server_starting", version=__version__, transport=settings.server.transport)

    if settings.server.transport == "http":
        run_http_server(mcp, settings, on_shutdown=_shared_state.aclose)
        return

    asyncio.run(_run_stdio())


if __name__ == "__main__":
    main()
