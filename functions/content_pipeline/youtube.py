"""
YouTube handlers: full transcript processing and lightweight metadata extraction.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

from content_pipeline.enrichment import analyze_content, clean_text
from content_pipeline.text_stats import format_iso_duration, statistics
from providers.claude import call_claude
from providers.exceptions import ProviderError
from providers.youtube_data import fetch_transcript, fetch_video_metadata
from service.config import Settings
from service.errors import DownstreamError, InvalidRequestError, NotFoundError

logger = logging.getLogger(__name__)

_VIDEO_ID_PATTERNS = [
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/watch\?v=([^&\n?#]+)"),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/embed/([^&\n?#]+)"),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/v/([^&\n?#]+)"),
    re.compile(r"(?:https?://)?youtu\.be/([^&\n?#]+)"),
    re.compile(r"(?:https?://)?(?:www\.)?youtube\.com/shorts/([^&\n?#]+)"),
]

DEFAULT_METADATA = {
    "title": "YouTube Video",
    "description": "",
    "duration": "",
    "channelTitle": "",
    "publishedAt": "",
    "viewCount": 0,
    "thumbnail": "",
}

DESCRIPTION_PROMPT = """Based on this YouTube video metadata, create educational content that would typically be covered in this video. Focus on the main educational concepts:

Title: {title}
Channel: {channel}
Description: {description}

Generate structured educational content covering the main topics this video would discuss."""

CLEANUP_INSTRUCTIONS = (
    "Clean and structure this YouTube video transcript/content for educational "
    "use. Remove filler words, organize into clear sections, add headings, and "
    "make it suitable for learning:"
)

ANALYSIS_PROMPT = """Analyze this educational YouTube video content and return ONLY a JSON object:
{{
  "contentType": "history|science|mathematics|geography|economics|literature|technology|general",
  "subject": "specific subject name",
  "examFocus": "upsc|ssc|banking|state_pcs|neet|jee|cbse|icse|general",
  "confidence": 0.0-1.0,
  "topics": ["topic1", "topic2", "topic3"],
  "difficulty": "beginner|intermediate|advanced"
}}

Video: {title}
Content: {content}"""

DEFAULT_ANALYSIS = {
    "contentType": "general",
    "subject": "General Studies",
    "examFocus": "general",
    "confidence": 0.7,
    "topics": [],
    "difficulty": "intermediate",
}

NO_CONTENT_MESSAGE = (
    "Unable to extract content from YouTube video. "
    "Video may not have captions available."
)


def extract_video_id(url: str) -> Optional[str]:
    for pattern in _VIDEO_ID_PATTERNS:
        match = pattern.search(url)
        if match:
            return match.group(1)
    return None


def _describe_from_metadata(metadata: dict, settings: Settings) -> str:
    if not metadata["description"] or not settings.claude_api_key:
        return ""
    prompt = DESCRIPTION_PROMPT.format(
        title=metadata["title"],
        channel=metadata["channelTitle"],
        description=metadata["description"][:1000],
    )
    try:
        return call_claude(
            prompt,
            api_key=settings.claude_api_key,
            model=settings.claude_model,
            max_tokens=2000,
        )
    except ProviderError as e:
        logger.warning("Claude content generation failed: %s", e)
        return ""


def process_youtube(url: Optional[str], language: Optional[str], settings: Settings) -> dict:
    if not url:
        raise InvalidRequestError("YouTube URL is required")
    video_id = extract_video_id(url)
    if not video_id:
        raise InvalidRequestError("Invalid YouTube URL format")
    language = language or "en"

    metadata = dict(DEFAULT_METADATA)
    if settings.youtube_api_key:
        try:
            fetched = fetch_video_metadata(video_id, settings.youtube_api_key)
        except ProviderError as e:
            logger.warning("YouTube API metadata fetch failed: %s", e)
            fetched = None
        if fetched:
            fetched.pop("tags", None)
            metadata.update(fetched)

    transcript, method = fetch_transcript(video_id, language)
    if not transcript:
        transcript = _describe_from_metadata(metadata, settings)
        if transcript:
            method = "ai-generated"
    if not transcript:
        raise InvalidRequestError(NO_CONTENT_MESSAGE)

    structured = clean_text(
        transcript,
        CLEANUP_INSTRUCTIONS,
        settings,
        max_tokens=3000,
        excerpt=f"Video Title: {metadata['title']}\nContent: {transcript[:4000]}",
    )
    analysis = analyze_content(
        ANALYSIS_PROMPT.format(title=metadata["title"], content=structured[:1500]),
        DEFAULT_ANALYSIS,
        settings,
        max_tokens=600,
    )

    duration = format_iso_duration(metadata["duration"])
    return {
        "success": True,
        "extractedText": structured,
        "videoMetadata": {**metadata, "duration": duration, "videoId": video_id, "url": url},
        "transcriptMethod": method,
        "statistics": statistics(structured, videoDuration=duration),
        "contentAnalysis": analysis,
        "processingSteps": [
            "YouTube URL validated and video ID extracted",
            "Video metadata retrieved from YouTube API",
            f"Transcript obtained via {method}",
            "Content cleaned and structured for learning",
            "Educational analysis completed",
        ],
    }


def extract_youtube(
    video_id: Optional[str], url: Optional[str], settings: Settings
) -> dict:
    """Metadata plus a best-effort transcript, without any AI passes."""
    if not video_id and not url:
        raise InvalidRequestError("Video ID or URL is required")
    if not video_id:
        video_id = extract_video_id(url)
        if not video_id:
            raise InvalidRequestError("Invalid YouTube URL format")
    if not settings.youtube_api_key:
        raise DownstreamError("YouTube API key not configured")

    metadata = fetch_video_metadata(video_id, settings.youtube_api_key)
    if metadata is None:
        raise NotFoundError("Video not found")
    transcript, _ = fetch_transcript(video_id)

    return {
        "videoId": video_id,
        "title": metadata["title"],
        "description": metadata["description"],
        "channelTitle": metadata["channelTitle"],
        "duration": format_iso_duration(metadata["duration"]),
        "thumbnail": metadata["thumbnail"]
        or f"https://img.youtube.com/vi/{video_id}/hqdefault.jpg",
        "transcript": transcript,
        "topics": metadata.get("tags", [])[:5],
        "viewCount": metadata["viewCount"],
        "publishedAt": metadata["publishedAt"],
    }
