from __future__ import annotations

from sodaxmcp.models.document import BrandDocument, SearchResult, Section, Subsection
from sodaxmcp.models.tools import (
    BrandOverviewOutput,
    GetSectionInput,
    GetSubsectionInput,
    ListSubsectionsOutput,
    RefreshOutput,
    SearchBrandBibleInput,
    SearchBrandBibleOutput,
    SectionOutput,
    SubsectionOutput,
)

__all__ = [
    # document
    "BrandDocument",
    "Section",
    "Subsection",
    "SearchResult",
    # tools
    "GetSectionInput",
    "GetSubsectionInput",
    "SearchBrandBibleInput",
    "BrandOverviewOutput",
    "SectionOutput",
    "SubsectionOutput",
    "SearchBrandBibleOutput",
    "RefreshOutput",
    "ListSubsectionsOutput",
]
