"""Unit tests for sodaxmcp.segmenter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sodaxmcp.segmenter import (
    DEFAULT_SECTION_DESCRIPTIONS,
    SECTION_CONTENT_LIMIT,
    SUBSECTION_CONTENT_LIMIT,
    extract_section_content,
    extract_subsection_content,
    segment,
    subsection_placeholder,
)

if TYPE_CHECKING:
    from sodaxmcp.models.document import Section
    from sodaxmcp.taxonomy import Taxonomy


def _by_id(sections: tuple[Section, ...]) -> dict[str, Section]:
    return {s.id: s for s in sections}


# ---------------------------------------------------------------------------
# segment
# ---------------------------------------------------------------------------


class TestSegment:
    def test_emits_every_taxonomy_entry(self, sample_text: str, taxonomy: Taxonomy) -> None:
        sections = segment(sample_text, taxonomy)
        assert [s.id for s in sections] == taxonomy.section_ids
        sub_ids = [sub.id for s in sections for sub in s.subsections]
        assert sub_ids == taxonomy.subsection_ids

    def test_titles_come_from_taxonomy(self, sample_text: str, taxonomy: Taxonomy) -> None:
        for section in segment(sample_text, taxonomy):
            assert section.title == taxonomy.section_title(section.id)
            for sub in section.subsections:
                assert sub.title == taxonomy.subsection_title(sub.id)

    def test_no_empty_content(self, taxonomy: Taxonomy) -> None:
        for section in segment("", taxonomy):
            assert section.content
            for sub in section.subsections:
                assert sub.content

    def test_extracted_subsections(self, sample_text: str, taxonomy: Taxonomy) -> None:
        sections = _by_id(segment(sample_text, taxonomy))
        subs = {sub.id: sub.content for s in sections.values() for sub in s.subsections}

        assert subs["1.1"] == "SODAX connects networks into one liquidity experience."
        assert subs["1.4"] == "• Clarity over hype\n• Reliability first"
        assert subs["4.1"] == (
            "Always use the logo on a dark background. Never stretch the logo."
        )
        assert subs["4.2"] == "Primary color is cherry red."

    def test_missing_subsection_gets_placeholder(
        self, sample_text: str, taxonomy: Taxonomy
    ) -> None:
        sections = _by_id(segment(sample_text, taxonomy))
        purpose = sections["1"].subsections[1]
        assert purpose.id == "1.2"
        assert purpose.content == subsection_placeholder("Brand Purpose")

    def test_extracted_section_runs_to_next_section(
        self, sample_text: str, taxonomy: Taxonomy
    ) -> None:
        sections = _by_id(segment(sample_text, taxonomy))
        content = sections["1"].content
        assert content.startswith("SODAX is the execution layer for cross-network finance.")
        # Subsection headings are not section boundaries
        assert "1.4 Brand Values" in content
        assert "Visual Identity" not in content

    def test_missing_sections_get_default_description(
        self, sample_text: str, taxonomy: Taxonomy
    ) -> None:
        sections = _by_id(segment(sample_text, taxonomy))
        for section_id in ("2", "3", "5", "6"):
            assert sections[section_id].content == DEFAULT_SECTION_DESCRIPTIONS[section_id]


# ---------------------------------------------------------------------------
# extract_section_content
# ---------------------------------------------------------------------------


class TestExtractSectionContent:
    def test_case_insensitive_title(self) -> None:
        text = "## 4. VISUAL IDENTITY\nAdaptive visuals."
        assert extract_section_content(text, "4", "Visual Identity") == "Adaptive visuals."

    def test_stops_before_next_heading_marker(self) -> None:
        text = "## 3. Verbal Identity\nCalm voice.\n\n## 4. Visual Identity\nOther."
        assert extract_section_content(text, "3", "Verbal Identity") == "Calm voice."

    def test_truncated_to_limit(self) -> None:
        text = "## 3. Verbal Identity\n" + "a" * (SECTION_CONTENT_LIMIT + 500)
        content = extract_section_content(text, "3", "Verbal Identity")
        assert len(content) == SECTION_CONTENT_LIMIT

    def test_empty_capture_falls_back(self) -> None:
        text = "## 3. Verbal Identity\n## 4. Visual Identity"
        content = extract_section_content(text, "3", "Verbal Identity")
        assert content == DEFAULT_SECTION_DESCRIPTIONS["3"]


# ---------------------------------------------------------------------------
# extract_subsection_content
# ---------------------------------------------------------------------------


class TestExtractSubsectionContent:
    def test_stops_at_any_numbered_token(self) -> None:
        text = "## 3.1 Tone of Voice\nCalm and clear.\n\n## 3.2 Writing Principles\nShort."
        assert extract_subsection_content(text, "3.1", "Tone of Voice") == "Calm and clear."

    def test_two_digit_subsection_id(self) -> None:
        text = "## 2.10 Positioning Guardrails\nNever overclaim.\n"
        content = extract_subsection_content(text, "2.10", "Positioning Guardrails")
        assert content == "Never overclaim."

    def test_dot_in_id_is_literal(self) -> None:
        # "1x1" must not satisfy the pattern for subsection "1.1"
        text = "1x1 Brand Overview\nWrong block."
        content = extract_subsection_content(text, "1.1", "Brand Overview")
        assert content == subsection_placeholder("Brand Overview")

    def test_truncated_to_limit(self) -> None:
        text = "4.3 Typography\n" + "b" * (SUBSECTION_CONTENT_LIMIT + 10)
        content = extract_subsection_content(text, "4.3", "Typography")
        assert len(content) == SUBSECTION_CONTENT_LIMIT

    def test_placeholder_mentions_title(self) -> None:
        assert subsection_placeholder("Typography") == (
            "Content for Typography. Please refer to the full Brand Bible for details."
        )
