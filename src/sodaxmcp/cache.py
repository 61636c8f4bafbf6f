"""In-memory Brand Bible cache with a fixed time-to-live.

Holds at most one BrandDocument snapshot. A read inside the TTL window
returns the stored snapshot; anything else rebuilds it through the
fetch → normalise → segment pipeline and swaps it in whole.

Rebuild failures are not caught here: the previous snapshot and timestamp
stay untouched and the SodaxError propagates to whichever caller triggered
the rebuild. Concurrent callers that each see a stale snapshot rebuild
independently; the last completed rebuild wins.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import structlog

from sodaxmcp.document import build_document
from sodaxmcp.taxonomy import BRAND_BIBLE_TAXONOMY

if TYPE_CHECKING:
    from collections.abc import Callable

    from sodaxmcp.models.document import BrandDocument
    from sodaxmcp.protocols import FetcherProtocol
    from sodaxmcp.taxonomy import Taxonomy

log = structlog.get_logger()

DEFAULT_TTL_SECONDS = 5 * 60


def _utcnow() -> datetime:
    return datetime.now(UTC)


class DocumentCache:
    """Single-snapshot cache implementing DocumentCacheProtocol."""

    def __init__(
        self,
        fetcher: FetcherProtocol,
        *,
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        taxonomy: Taxonomy = BRAND_BIBLE_TAXONOMY,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._fetcher = fetcher
        self._ttl = timedelta(seconds=ttl_seconds)
        self._taxonomy = taxonomy
        self._clock = clock
        self._document: BrandDocument | None = None
        self._fetched_at: datetime | None = None
        # Survives invalidate() so every rebuild gets a later timestamp
        self._last_issued: datetime | None = None

    @property
    def document(self) -> BrandDocument | None:
        """The stored snapshot, fresh or not. Never triggers a fetch."""
        return self._document

    def is_fresh(self) -> bool:
        if self._document is None or self._fetched_at is None:
            return False
        return self._clock() - self._fetched_at < self._ttl

    async def get(self) -> BrandDocument:
        """Return the cached snapshot, rebuilding it when absent or expired."""
        if self._document is not None and self.is_fresh():
            log.debug("document_cache_hit", fetched_at=self._fetched_at.isoformat())
            return self._document

        log.info("document_cache_miss", had_snapshot=self._document is not None)
        markup = await self._fetcher.fetch()
        fetched_at = self._next_timestamp()
        document = build_document(markup, self._taxonomy, fetched_at)

        # Single assignment pair; nothing awaits between them
        self._document = document
        self._fetched_at = fetched_at
        self._last_issued = fetched_at

        log.info(
            "document_rebuilt",
            version=document.version,
            sections=len(document.sections),
            content_length=len(document.raw_content),
        )
        return document

    def invalidate(self) -> None:
        """Drop the snapshot so the next get() rebuilds unconditionally."""
        self._document = None
        self._fetched_at = None
        log.info("document_cache_invalidated")

    def _next_timestamp(self) -> datetime:
        now = self._clock()
        if self._last_issued is not None and now <= self._last_issued:
            now = self._last_issued + timedelta(microseconds=1)
        return now
