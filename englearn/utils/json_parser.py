"""
JSON extraction utilities for LLM responses.

Extraction is split into two explicit stages so callers can tell which one
failed: locating the outermost bracket pair, then strict decoding.
"""

import json
import logging
from typing import Any

from englearn.utils.exceptions import MalformedJson, NoJsonFound

logger = logging.getLogger(__name__)

_BOUNDS = {
    "object": ("{", "}"),
    "array": ("[", "]"),
}


def locate_json(text: str, shape: str = "object") -> str:
    """
    Slice the JSON payload out of free-form text.

    Takes everything from the first opening bracket to the last closing bracket
    of the requested shape, so prose or ``` fences around it are ignored.

    Args:
        text: The raw response from the LLM
        shape: "object" for {...} payloads, "array" for [...] payloads

    Raises:
        NoJsonFound: if either bracket is missing or they are out of order
    """
    if shape not in _BOUNDS:
        raise ValueError(f"Unknown JSON shape: {shape}")
    open_ch, close_ch = _BOUNDS[shape]

    if not text:
        raise NoJsonFound("Empty response")

    start = text.find(open_ch)
    if start == -1:
        raise NoJsonFound(f"No '{open_ch}' found in response")
    end = text.rfind(close_ch)
    if end == -1 or end < start:
        raise NoJsonFound(f"No closing '{close_ch}' found in response")
    return text[start:end + 1]


def decode_json(fragment: str) -> Any:
    try:
        return json.loads(fragment)
    except json.JSONDecodeError as e:
        raise MalformedJson(f"Invalid JSON at line {e.lineno} column {e.colno}: {e.msg}") from e


def extract_json(text: str, shape: str = "object") -> Any:
    """Locate then decode; the decoded value is not yet validated."""
    return decode_json(locate_json(text, shape))


def has_code_fence(text: str) -> bool:
    return bool(text) and "```" in text


def has_braces(text: str) -> bool:
    return bool(text) and "{" in text and "}" in text
