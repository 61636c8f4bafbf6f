"""Tests for the public HTTP info routes served beside the MCP endpoint."""

from __future__ import annotations

import httpx
import pytest

import sodaxmcp.server as server
from sodaxmcp import __version__
from sodaxmcp.config import BRAND_BIBLE_URL, BrandBibleSettings, ServerSettings, Settings
from sodaxmcp.server import BRAND_BIBLE_TOOLS, SODAX_API_TOOLS, build_state, mcp
from sodaxmcp.state import SharedAppState
from sodaxmcp.transport import build_http_app


def _client() -> httpx.AsyncClient:
    app = build_http_app(mcp, Settings(server=ServerSettings(auth_enabled=True, auth_key="k")))
    return httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://localhost")


async def test_health() -> None:
    async with _client() as client:
        response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "service": "sodaxmcp", "version": __version__}


async def test_api_info_lists_tools() -> None:
    async with _client() as client:
        response = await client.get("/api")
    assert response.status_code == 200
    body = response.json()
    assert body["endpoints"]["mcp"] == "/mcp"
    assert body["sources"]["brandBible"]["source"] == BRAND_BIBLE_URL
    assert body["sources"]["brandBible"]["tools"] == BRAND_BIBLE_TOOLS
    assert body["sources"]["sodaxApi"]["tools"] == SODAX_API_TOOLS


async def test_api_info_resolves_settings_once(monkeypatch: pytest.MonkeyPatch) -> None:
    loads: list[Settings] = []

    def load() -> Settings:
        settings = Settings(brand_bible=BrandBibleSettings(url="https://example.test/bb"))
        loads.append(settings)
        return settings

    monkeypatch.setattr(server, "_shared_state", SharedAppState(load, build_state))

    async with _client() as client:
        first = await client.get("/api")
        second = await client.get("/api")

    assert first.json()["sources"]["brandBible"]["source"] == "https://example.test/bb"
    assert second.json() == first.json()
    assert len(loads) == 1


async def test_mcp_endpoint_still_requires_auth() -> None:
    async with _client() as client:
        response = await client.post("/mcp", json={})
    assert response.status_code == 401
