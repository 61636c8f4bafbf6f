"""Application state container.

AppState is created once per process by the composition root in server.py and
injected into every tool handler via the MCP Context object. It owns the only
DocumentCache in the process. SharedAppState is the handle the FastMCP lifespan
goes through: streamable HTTP enters that lifespan once per MCP session, so the
state itself must outlive any single session.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import structlog

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from sodaxmcp.api_client import SodaxApiClient
    from sodaxmcp.brand_bible import BrandBible
    from sodaxmcp.config import Settings
    from sodaxmcp.protocols import DocumentCacheProtocol, FetcherProtocol
    from sodaxmcp.taxonomy import Taxonomy

log = structlog.get_logger()


@dataclass
class AppState:
    """Holds all shared runtime state. Passed to every tool handler."""

    settings: Settings
    taxonomy: Taxonomy

    # Brand Bible pipeline
    http_client: httpx.AsyncClient | None = None
    fetcher: FetcherProtocol | None = None
    cache: DocumentCacheProtocol | None = None
    brand_bible: BrandBible | None = None

    # SODAX API pass-through
    api_client: SodaxApiClient | None = None


class SharedAppState:
    """Process-wide owner of the single AppState.

    Settings are resolved on first access and the AppState is built on the
    first session; every later session gets the same instance. Only
    ``aclose()`` releases it, and it is called once at process shutdown.
    """

    def __init__(
        self,
        load_settings: Callable[[], Settings],
        build: Callable[[Settings], AppState],
    ) -> None:
        self._load_settings = load_settings
        self._build = build
        self._settings: Settings | None = None
        self._state: AppState | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = self._load_settings()
        return self._settings

    def get(self) -> AppState:
        if self._state is None:
            self._state = self._build(self.settings)
        return self._state

    async def aclose(self) -> None:
        """Close the shared HTTP client. A no-op if no session ever started."""
        state, self._state = self._state, None
        if state is None:
            return
        if state.http_client is not None:
            await state.http_client.aclose()
        log.info("server_stopping")
