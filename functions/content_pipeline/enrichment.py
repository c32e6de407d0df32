"""
Claude cleanup and classification passes shared by the content handlers.

Both passes are secondary: a missing key or a provider failure falls back to
the input text or the default analysis.
"""

from __future__ import annotations

import logging
from typing import Optional

from providers.claude import call_claude
from providers.exceptions import ProviderError
from service.config import Settings
from shared.json_utils import extract_json_object

logger = logging.getLogger(__name__)


def clean_text(
    text: str,
    instructions: str,
    settings: Settings,
    max_tokens: int = 2000,
    excerpt: Optional[str] = None,
) -> str:
    """
    Asks Claude to clean up `text` for study use.

    Args:
        text (str): The raw text, returned unchanged on any failure.
        instructions (str): The cleanup instruction placed before the text.
        excerpt (str, optional): What to send instead of `text`, e.g. a
            truncated or annotated version.
    """
    if not settings.claude_api_key:
        return text
    body = text if excerpt is None else excerpt
    try:
        return call_claude(
            f"{instructions}\n\n{body}",
            api_key=settings.claude_api_key,
            model=settings.claude_model,
            max_tokens=max_tokens,
        )
    except ProviderError as e:
        logger.warning("Claude cleanup failed, using raw text: %s", e)
        return text


def analyze_content(
    prompt: str, defaults: dict, settings: Settings, max_tokens: int = 500
) -> dict:
    """Runs a classification prompt and merges the reply over `defaults`."""
    if not settings.claude_api_key:
        return dict(defaults)
    try:
        reply = call_claude(
            prompt,
            api_key=settings.claude_api_key,
            model=settings.claude_model,
            max_tokens=max_tokens,
        )
        parsed = extract_json_object(reply)
    except ProviderError as e:
        logger.warning("Content analysis failed, using defaults: %s", e)
        return dict(defaults)
    except ValueError as e:
        logger.warning("Failed to parse content analysis, using defaults: %s", e)
        return dict(defaults)
    return {**defaults, **parsed}
