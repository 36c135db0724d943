"""
JSON Utilities for LLM Response Parsing.

LLM outputs are asked for "JSON only" but routinely arrive wrapped in
markdown fences, surrounded by prose, or (for the more creative models)
with trailing commas.

Two entry points:
- parse_llm_json(): raises ValueError on anything it cannot parse
- try_parse_llm_json(): same parsing, returns None instead of raising

With repair=True, trailing commas are removed before parsing and the
json-repair library is used as a last resort.
"""

import json
import logging
import re
from typing import Any, Dict, Optional

from json_repair import repair_json

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```(?:json)?\n?")
_TRAILING_COMMA_OBJECT = re.compile(r",\s*}")
_TRAILING_COMMA_ARRAY = re.compile(r",\s*]")


def parse_llm_json(text: str, repair: bool = False) -> Dict[str, Any]:
    """
    Parse a JSON object from an LLM response.

    Args:
        text: Raw LLM response text that may contain JSON
        repair: Remove trailing commas and fall back to json-repair

    Returns:
        Parsed dictionary from the JSON

    Raises:
        ValueError: If no JSON object can be extracted or parsed

    Example:
        >>> parse_llm_json('```json\\n{"key": "value"}\\n```')
        {'key': 'value'}
        >>> parse_llm_json('{"items": [1, 2,],}', repair=True)
        {'items': [1, 2]}
    """
    if not text or not text.strip():
        raise ValueError("Empty input: no JSON content to parse")

    json_str = _strip_markdown_blocks(text)
    json_str = _extract_json_object(json_str)

    if repair:
        json_str = _remove_trailing_commas(json_str)

    try:
        parsed = json.loads(json_str)
    except json.JSONDecodeError as e:
        if not repair:
            raise ValueError(
                f"Failed to parse JSON: {e}\n"
                f"Original text (first 500 chars): {text[:500]}"
            ) from e
        parsed = _repair(json_str, text)

    if not isinstance(parsed, dict):
        raise ValueError(f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def try_parse_llm_json(text: str, repair: bool = True) -> Optional[Dict[str, Any]]:
    """
    Parse a JSON object from an LLM response, returning None on failure.

    Callers that treat unparseable output as "tier degraded" use this so they
    never need to care why parsing failed.
    """
    try:
        return parse_llm_json(text, repair=repair)
    except ValueError as e:
        logger.debug(f"LLM JSON parse failed: {e}")
        return None


def _repair(json_str: str, original: str) -> Any:
    """Last-resort repair via json-repair."""
    try:
        repaired = repair_json(json_str, return_objects=True)
    except Exception as e:
        raise ValueError(
            f"Failed to parse or repair JSON: {e}\n"
            f"Original text (first 500 chars): {original[:500]}"
        ) from e

    # json-repair returns "" when there was nothing salvageable
    if repaired in ("", None):
        raise ValueError(f"Failed to repair JSON. Original text (first 500 chars): {original[:500]}")
    if isinstance(repaired, list) and len(repaired) == 1 and isinstance(repaired[0], dict):
        return repaired[0]
    return repaired


def _strip_markdown_blocks(text: str) -> str:
    """
    Remove markdown code fence markers (```json and ```) wherever they appear.

    Args:
        text: Text that may be wrapped in markdown code blocks

    Returns:
        Text with fence markers removed and whitespace trimmed
    """
    return _FENCE_PATTERN.sub("", text).strip()


def _extract_json_object(text: str) -> str:
    """
    Extract the span from the first '{' to the last '}'.

    Raises:
        ValueError: If no JSON object pattern is found
    """
    json_match = re.search(r"\{.*\}", text, re.DOTALL)
    if json_match:
        return json_match.group(0)

    raise ValueError(f"No JSON object found in text: {text[:200]}")


def _remove_trailing_commas(text: str) -> str:
    """Drop commas directly before a closing brace or bracket."""
    text = _TRAILING_COMMA_OBJECT.sub("}", text)
    return _TRAILING_COMMA_ARRAY.sub("]", text)
