"""Markdown renderers for tool output.

Each renderer takes the JSON-mode payload a tool handler returned and turns it
into human-readable markdown. Renderers never fetch or validate anything, so
they can be tested against plain dicts. The structured payload is always sent
alongside the text, whichever format the caller asked for.
"""

from __future__ import annotations

import json
from typing import Any

from sodaxmcp.errors import ErrorCode, SodaxError
from sodaxmcp.models.tools import ResponseFormat, ResponseFormatInput

# Upper bound on the text of a single tool response
CHARACTER_LIMIT = 25000
SECTION_TRUNCATION_HINT = (
    "\n\n[Content truncated. Use sodax_get_subsection for specific subsections.]"
)
SEARCH_PREVIEW_CHARS = 500
MAX_LISTED_TOKENS = 50
MAX_LISTED_INTENTS = 10
MAX_LISTED_VOLUME = 10
MAX_LISTED_ORDERS = 20


def parse_response_format(value: str) -> ResponseFormat:
    """Validate a raw ``response_format`` argument."""
    try:
        return ResponseFormatInput(response_format=value).response_format
    except ValueError as exc:
        raise SodaxError(
            code=ErrorCode.INVALID_INPUT,
            message=str(exc),
            suggestion="Use response_format 'markdown' or 'json'.",
            recoverable=False,
        ) from exc


def render_json(payload: dict) -> str:
    return json.dumps(payload, indent=2)


def truncate(text: str, limit: int, hint: str) -> str:
    """Cut ``text`` to ``limit`` characters and append ``hint`` if it was longer."""
    if len(text) <= limit:
        return text
    return text[:limit] + hint


def _source_footer(source: str) -> list[str]:
    return ["---", f"*Source: {source}*"]


def _json_block(value: Any) -> list[str]:
    return ["```json", json.dumps(value, indent=2), "```"]


def _short(value: str | None, length: int) -> str:
    return f"{value[:length]}..." if value else "-"


# ---------------------------------------------------------------------------
# Brand Bible
# ---------------------------------------------------------------------------


def render_overview(payload: dict) -> str:
    lines = [
        "# SODAX Brand Bible Overview",
        "",
        f"**Version:** {payload['version']}",
        f"**Last Updated:** {payload['last_updated']}",
        f"**Source:** {payload['source']}",
        "",
        "## Summary",
        payload["summary"],
        "",
        "## Sections",
        "",
    ]
    for section in payload["sections"]:
        lines.append(f"### {section['id']}. {section['title']}")
        lines.append(f"- {section['subsection_count']} subsections")
        lines.append("")
    return "\n".join(lines)


def render_section(payload: dict) -> str:
    lines = [
        f"# {payload['section_id']}. {payload['title']}",
        "",
        f"*Last updated: {payload['last_updated']}*",
        "",
        payload["content"],
        "",
        "## Subsections",
        "",
    ]
    for sub in payload["subsections"]:
        lines.append(f"### {sub['id']} {sub['title']}")
        lines.append(sub["content"])
        lines.append("")
    lines.extend(_source_footer(payload["source"]))
    return "\n".join(lines)


def render_subsection(payload: dict) -> str:
    lines = [
        f"# {payload['id']} {payload['title']}",
        "",
        payload["content"],
        "",
        *_source_footer(payload["source"]),
    ]
    return "\n".join(lines)


def render_search(payload: dict) -> str:
    query = payload["query"]
    results = payload["results"]
    if not results:
        return (
            f'# Search Results for "{query}"\n\n'
            "No matching content found. Try different keywords or use "
            "sodax_get_brand_overview to see available sections."
        )

    lines = [
        f'# Search Results for "{query}"',
        "",
        f"Found {payload['total_results']} results (showing {len(results)}):",
        f"*Last updated: {payload['last_updated']}*",
        "",
    ]
    for result in results:
        if result["subsection_id"]:
            location = f"{result['subsection_id']} {result['subsection_title']}"
        else:
            location = f"{result['section_id']}. {result['section_title']}"
        content = result["content"]
        preview = content[:SEARCH_PREVIEW_CHARS]
        if len(content) > SEARCH_PREVIEW_CHARS:
            preview += "..."

        lines.append(f"## {location}")
        lines.append(f"*Relevance: {result['relevance']}*")
        lines.append("")
        lines.append(preview)
        lines.append("")
    lines.extend(_source_footer(payload["source"]))
    return "\n".join(lines)


def render_refresh(payload: dict) -> str:
    return (
        "✓ Brand Bible cache refreshed\n\n"
        f"Version: {payload['version']}\n"
        f"Last Updated: {payload['last_updated']}\n"
        f"Fetched At: {payload['fetched_at']}"
    )


def render_subsection_list(payload: dict) -> str:
    lines = ["# SODAX Brand Bible - All Subsections", ""]
    for section in payload["sections"]:
        lines.append(f"## {section['id']}. {section['title']}")
        lines.append("")
        for sub in section["subsections"]:
            lines.append(f"- **{sub['id']}**: {sub['title']}")
        lines.append("")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# SODAX API
# ---------------------------------------------------------------------------


def render_chains(payload: dict) -> str:
    lines = [
        "# SODAX Supported Chains",
        "",
        f"Total: {payload['total']} chains",
        "",
        "| Chain ID | Name |",
        "|----------|------|",
    ]
    for chain in payload["chains"]:
        lines.append(f"| {chain.get('chainId')} | {chain.get('name') or 'Unknown'} |")
    return "\n".join(lines)


def render_swap_tokens(payload: dict) -> str:
    chain_id = payload["chain_id"]
    title = "# SODAX Swap Tokens" if chain_id is None else f"# SODAX Swap Tokens (Chain {chain_id})"
    tokens = payload["tokens"]
    lines = [
        title,
        "",
        f"Total: {payload['total']} tokens",
        "",
        "| Symbol | Address | Decimals |",
        "|--------|---------|----------|",
    ]
    for token in tokens[:MAX_LISTED_TOKENS]:
        address = _short(token.get("address"), 10)
        lines.append(f"| {token.get('symbol')} | {address} | {token.get('decimals')} |")
    if len(tokens) > MAX_LISTED_TOKENS:
        lines.extend(["", f"*Showing {MAX_LISTED_TOKENS} of {len(tokens)} tokens*"])
    return "\n".join(lines)


def render_transaction(payload: dict) -> str:
    intent = payload["transaction"]
    lines = [
        "# Transaction Details",
        "",
        f"**Intent Hash:** {intent.get('intentHash')}",
        f"**Status:** {intent.get('status')}",
        f"**Source Chain:** {intent.get('sourceChainId')}",
        f"**Destination Chain:** {intent.get('destinationChainId')}",
        "",
        *_json_block(intent),
    ]
    return "\n".join(lines)


def render_user_transactions(payload: dict) -> str:
    history = payload["history"]
    intents = history.get("intents") or []
    lines = [
        "# Transaction History",
        f"**Address:** {payload['user_address']}",
        f"**Total:** {history.get('total') or len(intents)}",
        "",
    ]
    if intents:
        for intent in intents[:MAX_LISTED_INTENTS]:
            lines.append(f"- **{intent.get('status')}**: {_short(intent.get('intentHash'), 16)}")
    else:
        lines.append("No transactions found.")
    return "\n".join(lines)


def render_volume(payload: dict) -> str:
    volume = payload["volume"]
    items = volume.get("items") or []
    lines = [
        "# SODAX Volume Data",
        "",
        f"**Total Records:** {volume.get('total')}",
        f"**Showing:** {len(items)}",
        "",
        *_json_block(items[:MAX_LISTED_VOLUME]),
    ]
    return "\n".join(lines)


def render_orderbook(payload: dict) -> str:
    lines = [
        "# SODAX Orderbook",
        "",
        f"**Entries:** {payload['total']}",
        "",
        *_json_block(payload["entries"][:MAX_LISTED_ORDERS]),
    ]
    return "\n".join(lines)


def render_money_market_assets(payload: dict) -> str:
    lines = ["# SODAX Money Market Assets", "", f"**Total:** {payload['total']} assets", ""]
    for asset in payload["assets"]:
        lines.append(f"- **{asset.get('symbol')}**: {_short(asset.get('reserveAddress'), 16)}")
    return "\n".join(lines)


def render_user_position(payload: dict) -> str:
    position = payload["position"]
    lines = [
        "# Money Market Position",
        "",
        f"**Address:** {payload['user_address']}",
        "",
        *_json_block(position),
    ]
    return "\n".join(lines)


def render_partners(payload: dict) -> str:
    lines = ["# SODAX Partners", "", f"**Total:** {payload['total']} partners", ""]
    for partner in payload["partners"]:
        lines.append(f"- {partner.get('name') or partner.get('receiver')}")
    return "\n".join(lines)


def render_token_supply(payload: dict) -> str:
    supply = payload["supply"]
    lines = [
        "# SODA Token Supply",
        "",
        f"**Total Supply:** {supply.get('totalSupply')}",
        f"**Circulating Supply:** {supply.get('circulatingSupply')}",
        "",
        *_json_block(supply),
    ]
    return "\n".join(lines)
