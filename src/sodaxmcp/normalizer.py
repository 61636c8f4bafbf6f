"""HTML to flat-text normaliser for the Brand Bible page.

Single pass over the content region in document order. Output is one string
carrying only readable text plus two inline markers: ``## `` before headings
and ``• `` before list items. Layout, attributes and non-content nodes are
discarded; cutting the text into sections is the segmenter's job.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

HEADING_MARKER = "## "
BULLET_MARKER = "• "

_NON_CONTENT_TAGS = ["script", "style", "noscript"]
_CONTENT_REGION_SELECTOR = "main, article, .notion-page-content, [class*='page']"
_HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4"})
_BLOCK_TAGS = frozenset({"p", "div"})

_EXCESS_NEWLINES_RE = re.compile(r"\n{3,}")
_VERSION_RE = re.compile(r"Brand Bible v([\d.]+)")
_LAST_UPDATED_RE = re.compile(
    r"Last updated\s*[-–]\s*(.+?)(?=This Brand Bible|$)", re.IGNORECASE
)


@dataclass(frozen=True)
class PageMetadata:
    version: str = "unknown"
    last_updated: str = "unknown"


def parse_html(markup: str) -> BeautifulSoup:
    return BeautifulSoup(markup, "html.parser")


def extract_metadata(soup: BeautifulSoup) -> PageMetadata:
    """Read the version and last-updated banner from the page body text."""
    root = soup.body or soup
    page_text = root.get_text()

    version_match = _VERSION_RE.search(page_text)
    date_match = _LAST_UPDATED_RE.search(page_text)

    return PageMetadata(
        version=version_match.group(1) if version_match else "unknown",
        last_updated=date_match.group(1).strip() if date_match else "unknown",
    )


def normalize(markup: str) -> str:
    """Flatten raw HTML markup into marker-annotated plain text."""
    return flatten(parse_html(markup))


def flatten(soup: BeautifulSoup) -> str:
    """Flatten an already-parsed document. Removes non-content nodes in place."""
    for node in soup.find_all(_NON_CONTENT_TAGS):
        node.decompose()

    region = soup.select_one(_CONTENT_REGION_SELECTOR) or soup.body or soup

    parts: list[str] = []
    for elem in region.find_all(True):
        name = elem.name.lower()

        if name in _HEADING_TAGS:
            parts.append("\n\n" + HEADING_MARKER + elem.get_text().strip() + "\n")
        elif name in _BLOCK_TAGS:
            # Only the element's own text; nested blocks are visited on their own
            own_text = _direct_text(elem).strip()
            if own_text:
                parts.append(own_text + "\n")
        elif name == "li":
            parts.append(BULLET_MARKER + elem.get_text().strip() + "\n")

    text = _EXCESS_NEWLINES_RE.sub("\n\n", "".join(parts))
    return text.strip()


def _direct_text(elem: Tag) -> str:
    """Concatenate the text nodes that are direct children of ``elem``."""
    return "".join(
        str(child)
        for child in elem.children
        if isinstance(child, NavigableString) and not isinstance(child, PreformattedString)
    )
