"""
Image OCR: Google Vision text detection followed by Claude cleanup.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from content_pipeline.enrichment import analyze_content, clean_text
from content_pipeline.text_stats import word_count
from providers.google_vision import detect_text
from service.config import Settings
from service.errors import DownstreamError, InvalidRequestError

logger = logging.getLogger(__name__)

_DATA_URL_PREFIX = re.compile(r"^data:image/[a-z]+;base64,")

CLEANUP_INSTRUCTIONS = (
    "Clean up and structure this OCR-extracted text for educational use. "
    "Remove OCR artifacts, fix spacing, correct obvious mistakes, and organize "
    "into proper paragraphs. Keep all educational content intact:"
)

ANALYSIS_PROMPT = """Analyze this educational content and return ONLY a JSON object with these fields:
{{
  "contentType": "history|polity|geography|science|economics|literature|general",
  "subject": "specific subject name",
  "examFocus": "upsc|ssc|banking|state_pcs|neet|jee|general",
  "confidence": 0.0-1.0
}}

Content: {content}"""

DEFAULT_ANALYSIS = {
    "contentType": "general",
    "subject": "General Studies",
    "examFocus": "general",
    "confidence": 0.7,
}

PROCESSING_STEPS = [
    "Image processed with Google Vision API",
    "Text extracted and cleaned",
    "Content analyzed for educational classification",
    "Structured for learning platform use",
]


def process_image(image_data: Optional[str], settings: Settings) -> dict:
    if not image_data:
        raise InvalidRequestError("Image data is required")
    if not settings.google_vision_api_key:
        raise DownstreamError("Google Vision API key not configured")

    content = _DATA_URL_PREFIX.sub("", image_data)
    extracted = detect_text(content, settings.google_vision_api_key)
    if not extracted:
        raise InvalidRequestError("No text detected in image")

    structured = clean_text(extracted, CLEANUP_INSTRUCTIONS, settings, max_tokens=2000)
    analysis = analyze_content(
        ANALYSIS_PROMPT.format(content=structured[:1000]),
        DEFAULT_ANALYSIS,
        settings,
        max_tokens=500,
    )
    logger.info("OCR extracted %d characters", len(structured))
    return {
        "success": True,
        "extractedText": structured,
        "wordCount": word_count(structured),
        "contentAnalysis": analysis,
        "processingSteps": list(PROCESSING_STEPS),
    }
