"""Tests for the AppState shared by every MCP session in one process."""

from __future__ import annotations

from typing import TYPE_CHECKING

import sodaxmcp.tools.get_brand_overview as t_overview
import sodaxmcp.tools.get_section as t_section
from sodaxmcp.config import Settings
from sodaxmcp.server import build_state, make_lifespan, mcp
from sodaxmcp.state import SharedAppState

if TYPE_CHECKING:
    import respx


async def test_consecutive_sessions_fetch_the_page_once(http_mock: respx.MockRouter) -> None:
    shared = SharedAppState(Settings, build_state)
    lifespan = make_lifespan(shared)
    try:
        async with lifespan(mcp) as first:
            overview = await t_overview.handle(first)
        assert first.http_client is not None
        assert not first.http_client.is_closed

        async with lifespan(mcp) as second:
            again = await t_overview.handle(second)

        assert second is first
        assert again["fetched_at"] == overview["fetched_at"]
        assert http_mock["brand_bible"].call_count == 1
    finally:
        await shared.aclose()

    assert first.http_client.is_closed


async def test_overlapping_sessions_share_the_snapshot(http_mock: respx.MockRouter) -> None:
    shared = SharedAppState(Settings, build_state)
    lifespan = make_lifespan(shared)
    try:
        async with lifespan(mcp) as first, lifespan(mcp) as second, lifespan(mcp) as third:
            await t_overview.handle(first)
            await t_section.handle("1", second)
            await t_section.handle("4", third)
            assert first is second is third
        assert http_mock["brand_bible"].call_count == 1
    finally:
        await shared.aclose()
