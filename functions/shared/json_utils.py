"""
Helpers for pulling JSON out of free-form model replies.
"""

from __future__ import annotations

import json


def _extract(text: str, opener: str, closer: str, expected: type):
    start = text.find(opener)
    end = text.rfind(closer)
    if start == -1 or end <= start:
        raise ValueError(f"No JSON {expected.__name__} in response")
    parsed = json.loads(text[start : end + 1])
    if not isinstance(parsed, expected):
        raise ValueError(f"Response JSON is not a {expected.__name__}")
    return parsed


def extract_json_object(text: str) -> dict:
    """
    Parses the outermost JSON object in a reply, tolerating code fences and
    surrounding prose.

    Raises:
        ValueError: If no JSON object can be parsed.
    """
    return _extract(text, "{", "}", dict)


def extract_json_array(text: str) -> list:
    """Same as extract_json_object, for a top-level array."""
    return _extract(text, "[", "]", list)
