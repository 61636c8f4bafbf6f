"""Integration test fixtures.

Provides a fully wired AppState with a real httpx client whose traffic is
intercepted by respx. The Brand Bible page route serves the shared sample
HTML from tests/conftest.py; SODAX API routes are added per test.
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import httpx
import pytest
import respx

from sodaxmcp.config import BRAND_BIBLE_URL, Settings
from sodaxmcp.server import build_state

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Iterator

    from sodaxmcp.state import AppState


@pytest.fixture()
def subprocess_env() -> dict[str, str]:
    """Baseline env dict for subprocess-based MCP integration tests.

    Overrides any local sodaxmcp.yaml by forcing stdio transport and points
    both upstreams at an unroutable address so no test reaches the network.
    """
    env = os.environ.copy()
    env["SODAXMCP__SERVER__TRANSPORT"] = "stdio"
    env["SODAXMCP__BRAND_BIBLE__URL"] = "http://127.0.0.1:1/brand-bible"
    env["SODAXMCP__BRAND_BIBLE__TIMEOUT_SECONDS"] = "2"
    env["SODAXMCP__API__BASE_URL"] = "http://127.0.0.1:1/v1/be"
    env["SODAXMCP__API__TIMEOUT_SECONDS"] = "2"
    return env


@pytest.fixture()
def http_mock(sample_html: str) -> Iterator[respx.MockRouter]:
    """respx router with the Brand Bible page mocked. Unmatched requests fail."""
    with respx.mock(assert_all_called=False) as router:
        router.get(BRAND_BIBLE_URL, name="brand_bible").mock(
            return_value=httpx.Response(200, text=sample_html)
        )
        yield router


@pytest.fixture()
async def app_state(http_mock: respx.MockRouter) -> AsyncIterator[AppState]:
    """Full AppState from the server's own composition root."""
    state = build_state(Settings())
    assert state.http_client is not None
    try:
        yield state
    finally:
        await state.http_client.aclose()
