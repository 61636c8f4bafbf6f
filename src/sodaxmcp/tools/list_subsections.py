"""Tool handler for sodax_list_subsections.

Answers from the static taxonomy; never touches the network.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from sodaxmcp.models.tools import ListSubsectionsOutput, SectionListing, SubsectionListing

if TYPE_CHECKING:
    from sodaxmcp.state import AppState


async def handle(state: AppState) -> dict:
    """Handle a sodax_list_subsections tool call."""
    taxonomy = state.taxonomy
    output = ListSubsectionsOutput(
        sections=[
            SectionListing(
                id=section.id,
                title=section.title,
                subsections=[
                    SubsectionListing(id=sub.id, title=sub.title)
                    for sub in taxonomy.subsections_of(section.id)
                ],
            )
            for section in taxonomy.sections()
        ]
    )
    return output.model_dump(mode="json")
