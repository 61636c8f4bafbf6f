"""Lexical relevance scoring over a Brand Bible snapshot.

Pure business logic — receives a BrandDocument, returns SearchResult lists.
No knowledge of AppState, MCP, or I/O.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sodaxmcp.models.document import SearchResult

if TYPE_CHECKING:
    from sodaxmcp.models.document import BrandDocument

TERM_MATCH_SCORE = 10
MAX_REPEAT_BONUS = 5
KEYWORD_BOOST = 5
MIN_TERM_LENGTH = 3

BRAND_KEYWORDS: tuple[str, ...] = (
    "logo",
    "color",
    "typography",
    "font",
    "voice",
    "tone",
    "message",
    "audience",
    "value",
    "positioning",
    "visual",
    "identity",
    "brand",
    "sodax",
)


def query_terms(query: str) -> list[str]:
    """Lower-case and split on whitespace, dropping terms shorter than 3 chars."""
    return [term for term in query.lower().split() if len(term) >= MIN_TERM_LENGTH]


def score(text: str, terms: list[str]) -> int:
    """Score one content block against pre-split query terms.

    Each term found in the text earns 10, plus 1 per further occurrence
    (at most 5 more). Each brand keyword related to some term (either is a
    substring of the other) earns 5 when the keyword itself is in the text.
    """
    content = text.lower()
    total = 0

    for term in terms:
        occurrences = content.count(term)
        if occurrences:
            total += TERM_MATCH_SCORE + min(occurrences - 1, MAX_REPEAT_BONUS)

    for keyword in BRAND_KEYWORDS:
        related = any(term in keyword or keyword in term for term in terms)
        if related and keyword in content:
            total += KEYWORD_BOOST

    return total


def search(document: BrandDocument, query: str) -> list[SearchResult]:
    """Rank every section and subsection of ``document`` against ``query``.

    Returns all blocks with a positive score, best first. Ties keep document
    order: a section precedes its own subsections. No limit is applied here.
    """
    terms = query_terms(query)
    if not terms:
        return []

    results: list[SearchResult] = []
    for section in document.sections:
        relevance = score(f"{section.title} {section.content}", terms)
        if relevance > 0:
            results.append(
                SearchResult(
                    section_id=section.id,
                    section_title=section.title,
                    content=section.content,
                    relevance=relevance,
                )
            )

        for sub in section.subsections:
            relevance = score(f"{sub.title} {sub.content}", terms)
            if relevance > 0:
                results.append(
                    SearchResult(
                        section_id=section.id,
                        section_title=section.title,
                        subsection_id=sub.id,
                        subsection_title=sub.title,
                        content=sub.content,
                        relevance=relevance,
                    )
                )

    # sorted() is stable, so equal scores keep encounter order
    return sorted(results, key=lambda r: r.relevance, reverse=True)
