"""
Unit tests for src/common/json_utils.py

Tests robust JSON parsing for LLM outputs including:
- Valid JSON parsing
- Markdown code block extraction
- Prose surrounding the JSON object
- Trailing comma and json-repair fallback
- Error handling for invalid inputs
"""

import pytest
from src.common.json_utils import (
    parse_llm_json,
    try_parse_llm_json,
    _strip_markdown_blocks,
    _extract_json_object,
    _remove_trailing_commas,
)


# ===== TESTS: Valid JSON Parsing =====

class TestValidJsonParsing:
    """Tests for parsing valid, well-formed JSON."""

    def test_parses_simple_json(self):
        """Should parse simple valid JSON."""
        result = parse_llm_json('{"key": "value"}')
        assert result == {"key": "value"}

    def test_parses_nested_json(self):
        """Should parse nested JSON structures."""
        json_str = '{"jobDetails": {"title": "Engineer"}, "actionWords": ["build", "lead"]}'
        result = parse_llm_json(json_str)
        assert result["jobDetails"]["title"] == "Engineer"
        assert result["actionWords"] == ["build", "lead"]

    def test_parses_json_with_various_types(self):
        """Should parse JSON with string, number, boolean, null types."""
        json_str = '{"str": "text", "num": 42, "float": 3.14, "bool": true, "null": null}'
        result = parse_llm_json(json_str)
        assert result["num"] == 42
        assert result["bool"] is True
        assert result["null"] is None


# ===== TESTS: Markdown Code Block Extraction =====

class TestMarkdownExtraction:
    """Tests for extracting JSON from markdown code blocks."""

    def test_strips_json_markdown_block(self):
        """Should strip ```json ... ``` wrapper."""
        result = parse_llm_json('```json\n{"key": "value"}\n```')
        assert result == {"key": "value"}

    def test_strips_plain_markdown_block(self):
        """Should strip ``` ... ``` wrapper without a language tag."""
        result = parse_llm_json('```\n{"key": "value"}\n```')
        assert result == {"key": "value"}

    def test_strip_helper_removes_all_fences(self):
        assert _strip_markdown_blocks('```json\n{"a": 1}\n```') == '{"a": 1}'

    def test_extracts_object_from_surrounding_prose(self):
        """Should take the span from the first '{' to the last '}'."""
        text = 'Here is the analysis you asked for:\n{"sector": "Retail"}\nLet me know!'
        assert parse_llm_json(text) == {"sector": "Retail"}

    def test_extract_helper_raises_without_braces(self):
        with pytest.raises(ValueError, match="No JSON object found"):
            _extract_json_object("no json here")


# ===== TESTS: Repair =====

class TestRepair:
    """Tests for trailing comma removal and json-repair fallback."""

    def test_trailing_commas_fail_without_repair(self):
        with pytest.raises(ValueError, match="Failed to parse JSON"):
            parse_llm_json('{"items": [1, 2,],}')

    def test_trailing_commas_removed_with_repair(self):
        assert parse_llm_json('{"items": [1, 2,],}', repair=True) == {"items": [1, 2]}

    def test_remove_trailing_commas_helper(self):
        assert _remove_trailing_commas('{"a": [1, 2 , ] , }') == '{"a": [1, 2 ] }'

    def test_single_quotes_repaired(self):
        """Single-quoted keys are not valid JSON; json-repair fixes them."""
        result = parse_llm_json("{'sector': 'Retail'}", repair=True)
        assert result == {"sector": "Retail"}

    def test_unquoted_keys_repaired(self):
        result = parse_llm_json('{sector: "Retail"}', repair=True)
        assert result == {"sector": "Retail"}


# ===== TESTS: Error Handling =====

class TestErrorHandling:
    """Tests for inputs that cannot produce a JSON object."""

    @pytest.mark.parametrize("text", ["", "   ", None])
    def test_empty_input_raises(self, text):
        with pytest.raises(ValueError, match="Empty input"):
            parse_llm_json(text)

    def test_plain_prose_raises(self):
        with pytest.raises(ValueError):
            parse_llm_json("I could not analyze this posting.")

    def test_try_parse_returns_none_on_failure(self):
        assert try_parse_llm_json("I could not analyze this posting.") is None

    def test_try_parse_returns_dict_on_success(self):
        assert try_parse_llm_json('```json\n{"ok": true,}\n```') == {"ok": True}
