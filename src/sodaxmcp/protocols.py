"""Protocol interfaces for swappable components.

Tool handlers and AppState reference these protocols, not the concrete
implementations. This allows:
- Tests to use lightweight in-memory implementations
- The cache to be rebuilt from any markup source without changing tool code
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from sodaxmcp.models.document import BrandDocument


class FetcherProtocol(Protocol):
    """Interface for the Brand Bible source fetcher."""

    @property
    def url(self) -> str: ...

    async def fetch(self) -> str: ...


class DocumentCacheProtocol(Protocol):
    """Interface for the single-snapshot Brand Bible cache."""

    async def get(self) -> BrandDocument: ...

    def invalidate(self) -> None: ...
