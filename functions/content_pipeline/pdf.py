"""
PDF text extraction. PDF.co when configured, pdfminer locally otherwise.
"""

from __future__ import annotations

import base64
import binascii
import io
import logging
import re

from pdfminer.high_level import extract_text
from pdfminer.pdfdocument import PDFException
from pdfminer.psparser import PSException

from content_pipeline.enrichment import analyze_content, clean_text
from content_pipeline.text_stats import estimated_pages, statistics, word_count
from providers.exceptions import ProviderError
from providers.pdf_co import convert_to_text
from service.config import Settings
from service.errors import InvalidRequestError

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 50

_DATA_URL_PREFIX = re.compile(r"^data:application/pdf;base64,")

CLEANUP_INSTRUCTIONS = (
    "Clean up this PDF-extracted text and structure it for educational use. "
    "Remove PDF artifacts, fix formatting, organize into clear sections with "
    "headings. Keep all important educational content:"
)

ANALYSIS_PROMPT = """Analyze this educational PDF content and return ONLY a JSON object:
{{
  "contentType": "history|polity|geography|science|economics|literature|mathematics|general",
  "subject": "specific subject name",
  "examFocus": "upsc|ssc|banking|state_pcs|neet|jee|cbse|icse|general",
  "confidence": 0.0-1.0,
  "chapters": ["chapter1", "chapter2"],
  "keyTopics": ["topic1", "topic2", "topic3"]
}}

PDF Content: {content}"""

DEFAULT_ANALYSIS = {
    "contentType": "general",
    "subject": "General Studies",
    "examFocus": "general",
    "confidence": 0.8,
    "chapters": [],
    "keyTopics": [],
}

PROCESSING_STEPS = [
    "PDF uploaded and validated",
    "Text extracted from PDF pages",
    "Content cleaned and structured",
    "Educational analysis completed",
    "Ready for mission creation",
]


def _extract_locally(file_data: str, max_pages: int) -> str:
    try:
        pdf_bytes = base64.b64decode(_DATA_URL_PREFIX.sub("", file_data), validate=True)
    except (binascii.Error, ValueError) as e:
        raise InvalidRequestError("PDF file data is not valid base64") from e
    try:
        text = extract_text(io.BytesIO(pdf_bytes), page_numbers=range(max_pages))
    except (PSException, PDFException) as e:
        logger.warning("pdfminer could not parse the upload: %s", e)
        return ""
    return re.sub(r"\s+", " ", text or "").strip()


def extract_pdf_text(file_data: str, max_pages: int, settings: Settings) -> str:
    if settings.pdf_co_api_key:
        try:
            return convert_to_text(file_data, max_pages, settings.pdf_co_api_key)
        except ProviderError as e:
            logger.warning("PDF.co processing failed: %s", e)
    return _extract_locally(file_data, max_pages)


def process_pdf(
    file_data: str | None, file_name: str | None, max_pages, settings: Settings
) -> dict:
    if not file_data:
        raise InvalidRequestError("PDF file data is required")
    if max_pages is None:
        max_pages = 10
    if isinstance(max_pages, bool) or not isinstance(max_pages, int) or max_pages < 1:
        raise InvalidRequestError("maxPages must be a positive integer")

    extracted = extract_pdf_text(file_data, max_pages, settings)
    if len(extracted) < MIN_TEXT_LENGTH:
        raise InvalidRequestError("Unable to extract meaningful text from PDF")

    structured = clean_text(
        extracted,
        CLEANUP_INSTRUCTIONS,
        settings,
        max_tokens=3000,
        excerpt=extracted[:4000],
    )
    analysis = analyze_content(
        ANALYSIS_PROMPT.format(content=structured[:2000]),
        DEFAULT_ANALYSIS,
        settings,
        max_tokens=800,
    )
    return {
        "success": True,
        "extractedText": structured,
        "fileName": file_name,
        "statistics": statistics(
            structured, estimatedPages=estimated_pages(word_count(structured))
        ),
        "contentAnalysis": analysis,
        "processingSteps": list(PROCESSING_STEPS),
    }
