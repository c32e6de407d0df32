"""
Statistics attached to processed content.
"""

from __future__ import annotations

import math
import re

from shared.clock import utc_now_iso

WORDS_PER_MINUTE = 200
WORDS_PER_PAGE = 250

_ISO_DURATION_RE = re.compile(r"^PT(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?$")


def word_count(text: str) -> int:
    return len(text.split())


def reading_time_minutes(words: int) -> int:
    return math.ceil(words / WORDS_PER_MINUTE)


def estimated_pages(words: int) -> int:
    return math.ceil(words / WORDS_PER_PAGE)


def format_iso_duration(duration: str) -> str:
    """PT1H4M3S -> 1:04:03, PT4M13S -> 04:13. Anything else is returned as is."""
    match = _ISO_DURATION_RE.match(duration or "")
    if not match or duration == "PT":
        return duration
    hours, minutes, seconds = match.groups()
    parts = [hours] if hours else []
    parts.append((minutes or "0").zfill(2))
    parts.append((seconds or "0").zfill(2))
    return ":".join(parts)


def statistics(text: str, **extra) -> dict:
    words = word_count(text)
    stats = {
        "wordCount": words,
        "estimatedReadingTime": f"{reading_time_minutes(words)} min",
    }
    stats.update(extra)
    stats["processingDate"] = utc_now_iso()
    return stats
