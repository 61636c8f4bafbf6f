"""Fixed section/subsection structure of the SODAX Brand Bible.

The upstream page is free-form page-builder HTML, so the expected hierarchy
is declared here rather than discovered. Subsection order within a section
follows declaration order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

_SECTION_ID_RE = re.compile(r"^[1-6]$")
_SUBSECTION_ID_RE = re.compile(r"^\d+\.\d+$")

SECTION_TITLES: Mapping[str, str] = MappingProxyType(
    {
        "1": "Brand Essence and Foundations",
        "2": "Positioning and Messaging Architecture",
        "3": "Verbal Identity",
        "4": "Visual Identity",
        "5": "Brand Expression Across Channels",
        "6": "Brand Use in Partnerships and Integrations",
    }
)

SUBSECTION_TITLES: Mapping[str, str] = MappingProxyType(
    {
        # 1. Brand Essence
        "1.1": "Brand Overview",
        "1.2": "Brand Purpose",
        "1.3": "Brand Promise",
        "1.4": "Brand Values",
        "1.5": "Brand Personality",
        "1.6": "Core Brand Idea",
        # 2. Positioning
        "2.1": "Market Context",
        "2.2": "Category Definition",
        "2.3": "Problem Statement",
        "2.4": "SODAX Positioning Statement",
        "2.5": "Audience Segmentation",
        "2.6": "Messaging Pillars",
        "2.7": "Value Propositions by Audience",
        "2.8": "Competitive Differentiation",
        "2.9": "Proof Points",
        "2.10": "Positioning Guardrails",
        # 3. Verbal Identity
        "3.1": "Tone of Voice",
        "3.2": "Writing Principles",
        "3.3": "How We Talk to B2B Builders",
        "3.4": "How We Talk to B2C Users",
        "3.5": "Messaging Do's and Don'ts",
        "3.6": "Example Message Patterns",
        # 4. Visual Identity
        "4.1": "Logo Usage",
        "4.2": "Selected Color Palette",
        "4.3": "Typography",
        "4.4": "Iconography",
        "4.5": "Layout and Composition",
        "4.6": "Motion and Animation",
        "4.7": "Accessibility Standards",
        # 5. Channels
        "5.1": "Shared Principles (All Channels)",
        "5.2": "X",
        "5.3": "Reddit",
        "5.4": "YouTube",
        "5.5": "Consistency Rule",
        # 6. Partnerships
        "6.1": "Core Principle",
        "6.2": "Partner Announcements",
        "6.3": "Visual Presence in Partner Contexts",
        "6.4": "Case Studies (External)",
        "6.5": "Developer-facing Contexts",
    }
)


@dataclass(frozen=True)
class TaxonomyEntry:
    id: str
    title: str


class Taxonomy:
    """Two-tier table of section and subsection titles keyed by ID.

    Validated once on construction; raises ``ValueError`` when an ID is
    malformed or a subsection's prefix names no known section.
    """

    def __init__(self, sections: Mapping[str, str], subsections: Mapping[str, str]) -> None:
        for section_id in sections:
            if not _SECTION_ID_RE.match(section_id):
                raise ValueError(f"Invalid section ID: {section_id!r}")
        for subsection_id in subsections:
            if not _SUBSECTION_ID_RE.match(subsection_id):
                raise ValueError(f"Invalid subsection ID: {subsection_id!r}")
            if _section_prefix(subsection_id) not in sections:
                raise ValueError(f"Subsection {subsection_id!r} has no parent section")

        self._sections = MappingProxyType(dict(sections))
        self._subsections = MappingProxyType(dict(subsections))

    @property
    def section_ids(self) -> list[str]:
        return sorted(self._sections, key=int)

    @property
    def subsection_ids(self) -> list[str]:
        return list(self._subsections)

    def sections(self) -> list[TaxonomyEntry]:
        """Section entries in ID order."""
        return [TaxonomyEntry(id=sid, title=self._sections[sid]) for sid in self.section_ids]

    def subsections_of(self, section_id: str) -> list[TaxonomyEntry]:
        """Subsection entries belonging to ``section_id``, in declaration order."""
        return [
            TaxonomyEntry(id=sub_id, title=title)
            for sub_id, title in self._subsections.items()
            if _section_prefix(sub_id) == section_id
        ]

    def section_title(self, section_id: str) -> str | None:
        return self._sections.get(section_id)

    def subsection_title(self, subsection_id: str) -> str | None:
        return self._subsections.get(subsection_id)


def _section_prefix(subsection_id: str) -> str:
    return subsection_id.split(".", 1)[0]


BRAND_BIBLE_TAXONOMY = Taxonomy(SECTION_TITLES, SUBSECTION_TITLES)
