"""In-process tests for the MCP tool result and error envelopes."""

from __future__ import annotations

import json

import pytest

from sodaxmcp import formatting
from sodaxmcp.errors import ErrorCode, SodaxError
from sodaxmcp.server import _run_tool

PARTNERS = {
    "partners": [{"name": "Hana Wallet", "receiver": "0xr1"}],
    "total": 1,
    "source": "https://api.sodax.com/v1/be/docs",
}


async def _raises(error: Exception) -> dict:
    raise error


async def _returns(payload: dict) -> dict:
    return payload


def _long_section() -> dict:
    return {
        "section_id": "4",
        "title": "Visual Identity",
        "content": "Intro.",
        "subsections": [
            {"id": "4.1", "title": "Logo Usage", "content": "x" * formatting.CHARACTER_LIMIT},
        ],
        "source": "https://iconfoundation.notion.site/brand-bible-v1",
        "last_updated": "January 2026",
    }


# ---------------------------------------------------------------------------
# Successful calls
# ---------------------------------------------------------------------------


class TestToolResult:
    async def test_markdown_text_with_structured_payload(self) -> None:
        result = await _run_tool(
            "sodax_get_partners", _returns(PARTNERS), "markdown", formatting.render_partners
        )
        assert result.isError is False
        assert result.content[0].text.startswith("# SODAX Partners")
        assert result.structuredContent == PARTNERS

    async def test_json_text(self) -> None:
        result = await _run_tool(
            "sodax_get_partners", _returns(PARTNERS), "json", formatting.render_partners
        )
        assert json.loads(result.content[0].text) == PARTNERS
        assert result.structuredContent == PARTNERS

    async def test_unknown_format_is_invalid_input(self) -> None:
        result = await _run_tool(
            "sodax_get_partners", _returns(PARTNERS), "yaml", formatting.render_partners
        )
        assert result.isError is True
        payload = json.loads(result.content[0].text)
        assert payload["error"]["code"] == "INVALID_INPUT"
        assert payload["error"]["suggestion"] == "Use response_format 'markdown' or 'json'."

    @pytest.mark.parametrize("response_format", ["markdown", "json"])
    async def test_long_section_truncated(self, response_format: str) -> None:
        section = _long_section()
        result = await _run_tool(
            "sodax_get_section",
            _returns(section),
            response_format,
            formatting.render_section,
            truncation_hint=formatting.SECTION_TRUNCATION_HINT,
        )
        text = result.content[0].text
        assert len(text) == formatting.CHARACTER_LIMIT + len(formatting.SECTION_TRUNCATION_HINT)
        assert text.endswith(
            "[Content truncated. Use sodax_get_subsection for specific subsections.]"
        )
        assert result.structuredContent == section

    async def test_without_hint_nothing_is_truncated(self) -> None:
        section = _long_section()
        result = await _run_tool(
            "sodax_get_section", _returns(section), "markdown", formatting.render_section
        )
        assert len(result.content[0].text) > formatting.CHARACTER_LIMIT


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class TestToolErrors:
    async def test_sodax_error_serializes_to_structured_tool_error(self) -> None:
        error = SodaxError(
            code=ErrorCode.SECTION_NOT_FOUND,
            message="Section '9' not found. Valid sections are 1, 2, 3, 4, 5, 6.",
            suggestion="Call sodax_get_brand_overview to see all sections.",
        )
        result = await _run_tool(
            "sodax_get_section", _raises(error), "markdown", formatting.render_section
        )

        assert result.isError is True
        payload = json.loads(result.content[0].text)
        assert payload == {
            "error": {
                "code": "SECTION_NOT_FOUND",
                "message": "Section '9' not found. Valid sections are 1, 2, 3, 4, 5, 6.",
                "suggestion": "Call sodax_get_brand_overview to see all sections.",
                "recoverable": False,
            }
        }

    async def test_unexpected_error_propagates(self) -> None:
        with pytest.raises(RuntimeError, match="not initialized"):
            await _run_tool(
                "sodax_get_section",
                _raises(RuntimeError("cache not initialized")),
                "markdown",
                formatting.render_section,
            )
