from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class Subsection(BaseModel):
    """Second-tier block of the Brand Bible, e.g. ``3.1 Tone of Voice``."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    content: str  # At most 1500 chars, never empty


class Section(BaseModel):
    """Top-level block of the Brand Bible, IDs ``"1"`` to ``"6"``."""

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    content: str  # At most 2000 chars, never empty
    subsections: tuple[Subsection, ...] = ()  # Taxonomy order, not document order


class BrandDocument(BaseModel):
    """One immutable snapshot of the segmented Brand Bible.

    Replaced wholesale by the cache on refresh, never mutated in place.
    """

    model_config = ConfigDict(frozen=True)

    version: str
    last_updated: str
    sections: tuple[Section, ...]
    raw_content: str  # Normalised flat text the sections were cut from
    fetched_at: datetime


class SearchResult(BaseModel):
    """Single ranked match returned by a Brand Bible search."""

    section_id: str
    section_title: str
    subsection_id: str | None = None
    subsection_title: str | None = None
    content: str
    relevance: int  # >= 1; zero-score blocks are never returned
