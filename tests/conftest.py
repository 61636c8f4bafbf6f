"""Shared test fixtures for the sodaxmcp test suite."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest

from sodaxmcp.errors import SodaxError
from sodaxmcp.taxonomy import BRAND_BIBLE_TAXONOMY, Taxonomy

BRAND_BIBLE_URL = "https://iconfoundation.notion.site/brand-bible-v1"

# Minified banner: the version/date regexes expect the text nodes to abut.
SAMPLE_HTML = """\
<html>
<head>
<title>SODAX Brand Bible</title>
<script>var heading = "2. Positioning and Messaging Architecture";</script>
<style>.notion-page { color: red; }</style>
</head>
<body>
<nav><p>Navigation</p></nav>
<main class="notion-page-content">\
<h1>SODAX Brand Bible v1.2</h1><p>Last updated - January 2026</p>\
<p>This Brand Bible defines how SODAX should be represented externally.</p>
<h2>1. Brand Essence and Foundations</h2>
<p>SODAX is the execution layer for cross-network finance.</p>
<h3>1.1 Brand Overview</h3>
<p>SODAX connects networks into one liquidity experience.</p>
<h3>1.4 Brand Values</h3>
<ul><li>Clarity over hype</li><li>Reliability first</li></ul>
<h2>4. Visual Identity</h2>
<p>Our visual identity is adaptive.</p>
<h3>4.1 Logo Usage</h3>
<p>Always use the logo on a dark background. Never stretch the logo.</p>
<h3>4.2 Selected Color Palette</h3>
<p>Primary color is cherry red.</p>
<noscript><p>Enable JavaScript</p></noscript>
</main>
</body>
</html>
"""

SAMPLE_TEXT = (
    "## SODAX Brand Bible v1.2\n"
    "Last updated - January 2026\n"
    "This Brand Bible defines how SODAX should be represented externally.\n"
    "\n"
    "## 1. Brand Essence and Foundations\n"
    "SODAX is the execution layer for cross-network finance.\n"
    "\n"
    "## 1.1 Brand Overview\n"
    "SODAX connects networks into one liquidity experience.\n"
    "\n"
    "## 1.4 Brand Values\n"
    "• Clarity over hype\n"
    "• Reliability first\n"
    "\n"
    "## 4. Visual Identity\n"
    "Our visual identity is adaptive.\n"
    "\n"
    "## 4.1 Logo Usage\n"
    "Always use the logo on a dark background. Never stretch the logo.\n"
    "\n"
    "## 4.2 Selected Color Palette\n"
    "Primary color is cherry red."
)


class FakeClock:
    """Manually advanced UTC clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2026, 1, 1, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += timedelta(seconds=seconds)


class FakeFetcher:
    """In-memory FetcherProtocol implementation that counts calls."""

    def __init__(self, markup: str = SAMPLE_HTML) -> None:
        self.markup = markup
        self.error: SodaxError | None = None
        self.calls = 0

    @property
    def url(self) -> str:
        return BRAND_BIBLE_URL

    async def fetch(self) -> str:
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.markup


@pytest.fixture()
def taxonomy() -> Taxonomy:
    return BRAND_BIBLE_TAXONOMY


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture()
def sample_html() -> str:
    return SAMPLE_HTML


@pytest.fixture()
def sample_text() -> str:
    return SAMPLE_TEXT
