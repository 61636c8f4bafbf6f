"""HTTP fetcher for the Brand Bible source page.

All network I/O for the Brand Bible goes through a single DocumentFetcher
instance shared across tool calls. The fetcher receives an httpx.AsyncClient
via constructor injection — the lifespan owns the client lifecycle.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
import structlog

from sodaxmcp.errors import ErrorCode, SodaxError

if TYPE_CHECKING:
    from sodaxmcp.config import BrandBibleSettings

log = structlog.get_logger()

HTML_ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"


def build_http_client(settings: BrandBibleSettings) -> httpx.AsyncClient:
    """Create the shared httpx client. Called once at startup."""
    return httpx.AsyncClient(
        follow_redirects=True,
        timeout=httpx.Timeout(settings.timeout_seconds),
        headers={"User-Agent": settings.user_agent},
        limits=httpx.Limits(
            max_connections=10,
            max_keepalive_connections=5,
        ),
    )


class DocumentFetcher:
    """Fetches the raw Brand Bible markup. One attempt per call, no retries."""

    def __init__(self, client: httpx.AsyncClient, settings: BrandBibleSettings) -> None:
        self._client = client
        self._url = settings.url
        self._timeout = settings.timeout_seconds
        self._user_agent = settings.user_agent

    @property
    def url(self) -> str:
        return self._url

    async def fetch(self) -> str:
        """Fetch the source page and return its markup.

        Raises SodaxError with DOCUMENT_NOT_FOUND on HTTP 404,
        DOCUMENT_FETCH_TIMEOUT when the bounded wait elapses, and
        DOCUMENT_FETCH_FAILED for every other transport or HTTP failure.
        """
        try:
            response = await self._client.get(
                self._url,
                headers={"User-Agent": self._user_agent, "Accept": HTML_ACCEPT},
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            log.warning("document_fetch_timeout", url=self._url, timeout=self._timeout)
            raise SodaxError(
                code=ErrorCode.DOCUMENT_FETCH_TIMEOUT,
                message="Request timed out while fetching Brand Bible.",
                suggestion="Please try again.",
                recoverable=True,
            ) from exc
        except httpx.HTTPError as exc:
            raise SodaxError(
                code=ErrorCode.DOCUMENT_FETCH_FAILED,
                message=f"Failed to fetch Brand Bible: {exc}",
                suggestion="The Brand Bible source may be temporarily unavailable.",
                recoverable=True,
            ) from exc

        if response.status_code == 404:
            raise SodaxError(
                code=ErrorCode.DOCUMENT_NOT_FOUND,
                message="Brand Bible page not found. The URL may have changed.",
                suggestion="Check the configured brand_bible.url setting.",
                recoverable=False,
            )
        if not response.is_success:
            raise SodaxError(
                code=ErrorCode.DOCUMENT_FETCH_FAILED,
                message=f"Failed to fetch Brand Bible: HTTP {response.status_code}",
                suggestion="The Brand Bible source may be temporarily unavailable.",
                recoverable=True,
            )

        log.info(
            "document_fetch_complete",
            url=self._url,
            status_code=response.status_code,
            content_length=len(response.text),
        )
        return response.text
