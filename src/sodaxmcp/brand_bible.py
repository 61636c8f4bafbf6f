"""Read operations over the cached Brand Bible.

Every call goes through the DocumentCache, so any of them may trigger a
network rebuild. Lookups return ``None`` for unknown IDs; turning that into
a user-facing not-found error is the tool handler's job.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sodaxmcp import scorer

if TYPE_CHECKING:
    from sodaxmcp.models.document import BrandDocument, SearchResult, Section, Subsection
    from sodaxmcp.protocols import DocumentCacheProtocol


def find_section(document: BrandDocument, section_id: str) -> Section | None:
    return next((s for s in document.sections if s.id == section_id), None)


def find_subsection(document: BrandDocument, subsection_id: str) -> Subsection | None:
    for section in document.sections:
        for sub in section.subsections:
            if sub.id == subsection_id:
                return sub
    return None


class BrandBible:
    def __init__(self, cache: DocumentCacheProtocol) -> None:
        self._cache = cache

    async def get_document(self) -> BrandDocument:
        return await self._cache.get()

    async def get_section(self, section_id: str) -> Section | None:
        return find_section(await self._cache.get(), section_id)

    async def get_subsection(self, subsection_id: str) -> Subsection | None:
        return find_subsection(await self._cache.get(), subsection_id)

    async def search(self, query: str) -> list[SearchResult]:
        """Full ranked result list; callers apply their own limit."""
        document = await self._cache.get()
        return scorer.search(document, query)

    async def refresh(self) -> BrandDocument:
        """Discard the cached snapshot and rebuild it from the network."""
        self._cache.invalidate()
        return await self._cache.get()
