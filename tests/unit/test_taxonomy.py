"""Unit tests for sodaxmcp.taxonomy."""

from __future__ import annotations

import pytest

from sodaxmcp.taxonomy import BRAND_BIBLE_TAXONOMY, SUBSECTION_TITLES, Taxonomy


class TestBrandBibleTaxonomy:
    def test_six_sections_in_numeric_order(self) -> None:
        assert BRAND_BIBLE_TAXONOMY.section_ids == ["1", "2", "3", "4", "5", "6"]

    def test_subsection_count(self) -> None:
        assert len(BRAND_BIBLE_TAXONOMY.subsection_ids) == 39

    def test_every_subsection_has_parent(self) -> None:
        section_ids = set(BRAND_BIBLE_TAXONOMY.section_ids)
        for sub_id in SUBSECTION_TITLES:
            assert sub_id.split(".")[0] in section_ids

    def test_subsections_of_keeps_declaration_order(self) -> None:
        ids = [e.id for e in BRAND_BIBLE_TAXONOMY.subsections_of("2")]
        # "2.10" follows "2.9", not "2.1"
        assert ids[-2:] == ["2.9", "2.10"]
        assert len(ids) == 10

    def test_titles(self) -> None:
        assert BRAND_BIBLE_TAXONOMY.section_title("4") == "Visual Identity"
        assert BRAND_BIBLE_TAXONOMY.subsection_title("4.1") == "Logo Usage"
        assert BRAND_BIBLE_TAXONOMY.subsection_title("5.2") == "X"

    def test_unknown_ids_return_none(self) -> None:
        assert BRAND_BIBLE_TAXONOMY.section_title("9") is None
        assert BRAND_BIBLE_TAXONOMY.subsection_title("9.9") is None


class TestValidation:
    def test_rejects_malformed_section_id(self) -> None:
        with pytest.raises(ValueError, match="Invalid section ID"):
            Taxonomy({"one": "First"}, {})

    def test_rejects_malformed_subsection_id(self) -> None:
        with pytest.raises(ValueError, match="Invalid subsection ID"):
            Taxonomy({"1": "First"}, {"1-1": "Nested"})

    def test_rejects_orphan_subsection(self) -> None:
        with pytest.raises(ValueError, match="no parent section"):
            Taxonomy({"1": "First"}, {"2.1": "Orphan"})

    def test_is_immutable(self) -> None:
        with pytest.raises(TypeError):
            SUBSECTION_TITLES["9.9"] = "Injected"  # type: ignore[index]
