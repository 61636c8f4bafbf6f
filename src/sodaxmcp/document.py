"""Assemble a BrandDocument snapshot from raw page markup.

Parses once, reads the version banner, flattens the content region and
segments it against the taxonomy. Pure — the caller supplies the timestamp.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sodaxmcp.models.document import BrandDocument
from sodaxmcp.normalizer import extract_metadata, flatten, parse_html
from sodaxmcp.segmenter import segment

if TYPE_CHECKING:
    from datetime import datetime

    from sodaxmcp.taxonomy import Taxonomy


def build_document(markup: str, taxonomy: Taxonomy, fetched_at: datetime) -> BrandDocument:
    soup = parse_html(markup)
    # Metadata is read before flatten() strips non-content nodes from the tree
    metadata = extract_metadata(soup)
    raw_content = flatten(soup)

    return BrandDocument(
        version=metadata.version,
        last_updated=metadata.last_updated,
        sections=segment(raw_content, taxonomy),
        raw_content=raw_content,
        fetched_at=fetched_at,
    )
