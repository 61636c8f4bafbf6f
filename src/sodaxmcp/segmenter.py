"""Cut the normalised Brand Bible text into the fixed section hierarchy.

The source page is arbitrary page-builder HTML, so segmentation is
best-effort pattern matching over the flattened text: each block starts at
``"<id>. <title>"`` (sections) or ``"<id> <title>"`` (subsections) and runs
lazily to the next numbered token. Nothing is validated — overlapping or
out-of-order headings in the source can make one block swallow the next.

Every block always gets a non-empty body: a missing match falls back to a
canned description (sections) or a placeholder (subsections).
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from sodaxmcp.models.document import Section, Subsection
from sodaxmcp.normalizer import HEADING_MARKER

if TYPE_CHECKING:
    from sodaxmcp.taxonomy import Taxonomy

SECTION_CONTENT_LIMIT = 2000
SUBSECTION_CONTENT_LIMIT = 1500

# Hand-written summaries, not extracted from the source page.
DEFAULT_SECTION_DESCRIPTIONS: dict[str, str] = {
    "1": (
        "Defines SODAX's core identity, purpose, promise, values, personality, "
        "and central brand idea."
    ),
    "2": (
        "Covers market positioning, audience segmentation, messaging pillars, "
        "value propositions, and competitive differentiation."
    ),
    "3": (
        "SODAX is serious infrastructure. Our voice should feel calm, competent, "
        "and human. We translate complex cross-network execution into language "
        "that is clear, credible, and easy to repeat."
    ),
    "4": (
        "SODAX's visual identity is adaptive, not rigid. It scales in intensity "
        "based on context, intent, and user mindset."
    ),
    "5": (
        "Defines how the SODAX brand should appear across public channels with "
        "consistency of meaning while allowing platform-native expression."
    ),
    "6": (
        "Defines how SODAX should be represented when it appears outside its own "
        "managed channels."
    ),
}
_GENERIC_SECTION_DESCRIPTION = "Brand guidelines content."


def subsection_placeholder(title: str) -> str:
    return f"Content for {title}. Please refer to the full Brand Bible for details."


def default_section_description(section_id: str) -> str:
    return DEFAULT_SECTION_DESCRIPTIONS.get(section_id, _GENERIC_SECTION_DESCRIPTION)


def segment(text: str, taxonomy: Taxonomy) -> tuple[Section, ...]:
    """Build every section of ``taxonomy`` from the flattened page text."""
    sections: list[Section] = []

    for entry in taxonomy.sections():
        subsections = tuple(
            Subsection(
                id=sub.id,
                title=sub.title,
                content=extract_subsection_content(text, sub.id, sub.title),
            )
            for sub in taxonomy.subsections_of(entry.id)
        )
        sections.append(
            Section(
                id=entry.id,
                title=entry.title,
                content=extract_section_content(text, entry.id, entry.title),
                subsections=subsections,
            )
        )

    return tuple(sections)


def extract_section_content(text: str, section_id: str, title: str) -> str:
    """Text following ``"<id>. <title>"`` up to the next ``"N. Word"`` heading."""
    pattern = re.compile(
        rf"{re.escape(section_id)}\.\s*{re.escape(title)}(.*?)(?=\d+\.\s+[A-Z]|\Z)",
        re.IGNORECASE | re.DOTALL,
    )
    match = pattern.search(text)
    if match:
        content = _clean(match.group(1))[:SECTION_CONTENT_LIMIT]
        if content:
            return content
    return default_section_description(section_id)


def extract_subsection_content(text: str, subsection_id: str, title: str) -> str:
    """Text following ``"<id> <title>"`` up to the next ``N.M`` or ``N.`` token."""
    pattern = re.compile(
        rf"{re.escape(subsection_id)}\s*{re.escape(title)}(.*?)(?=\d+\.\d+|\d+\.|\Z)",
        re.IGNORECASE | re.DOTALL,
    )
    match = pattern.search(text)
    if match:
        content = _clean(match.group(1))[:SUBSECTION_CONTENT_LIMIT]
        if content:
            return content
    return subsection_placeholder(title)


def _clean(captured: str) -> str:
    # The lookahead stops just after the next heading's "## " marker
    return captured.strip().removesuffix(HEADING_MARKER.strip()).strip()
