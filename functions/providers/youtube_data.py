import logging
from typing import Optional

import requests

from providers.exceptions import ProviderError, ProviderInvalidResponseError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30  # seconds

VIDEOS_URL = "https://www.googleapis.com/youtube/v3/videos"
TRANSCRIPT_API_URL = "https://youtube-transcript-api.herokuapp.com/transcript"
ALT_TRANSCRIPT_URL = "https://api.youtubetranscript.com/"


def fetch_video_metadata(video_id: str, api_key: str) -> Optional[dict]:
    """
    Fetches snippet, contentDetails and statistics for a video.

    Returns:
        A flat metadata dict, or None if the id matched no video.

    Raises:
        ProviderError: On transport errors or a non-success status.
    """
    try:
        response = requests.get(
            VIDEOS_URL,
            params={
                "id": video_id,
                "key": api_key,
                "part": "snippet,contentDetails,statistics",
            },
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        raise ProviderError(f"YouTube API error: {e}") from e

    if not response.ok:
        raise ProviderError(f"YouTube API error: {response.status_code}")

    try:
        payload = response.json()
    except ValueError as e:
        raise ProviderInvalidResponseError(f"YouTube API returned invalid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ProviderInvalidResponseError("YouTube API returned an unexpected payload")
    items = payload.get("items") or []
    if not items:
        return None

    video = items[0]
    snippet = video.get("snippet", {})
    thumbnails = snippet.get("thumbnails", {})
    return {
        "title": snippet.get("title", ""),
        "description": snippet.get("description", ""),
        "duration": video.get("contentDetails", {}).get("duration", ""),
        "channelTitle": snippet.get("channelTitle", ""),
        "publishedAt": snippet.get("publishedAt", ""),
        "viewCount": int(video.get("statistics", {}).get("viewCount") or 0),
        "thumbnail": (thumbnails.get("maxres") or thumbnails.get("high") or {}).get(
            "url", ""
        ),
        "tags": snippet.get("tags", []),
    }


def _fetch_from_transcript_api(video_id: str, language: str) -> str:
    response = requests.get(
        TRANSCRIPT_API_URL,
        params={"video_id": video_id, "lang": language},
        timeout=REQUEST_TIMEOUT,
    )
    if not response.ok:
        return ""
    payload = response.json()
    items = payload.get("transcript") if isinstance(payload, dict) else None
    if not isinstance(items, list):
        return ""
    return " ".join(
        item["text"]
        for item in items
        if isinstance(item, dict) and isinstance(item.get("text"), str)
    ).strip()


def _fetch_from_alt_service(video_id: str, language: str) -> str:
    response = requests.get(
        ALT_TRANSCRIPT_URL,
        params={"video": video_id, "lang": language},
        timeout=REQUEST_TIMEOUT,
    )
    if not response.ok:
        return ""
    payload = response.json()
    text = payload.get("text") if isinstance(payload, dict) else None
    return text.strip() if isinstance(text, str) else ""


def fetch_transcript(video_id: str, language: str = "en") -> tuple[str, str]:
    """
    Tries the public transcript services in order.

    Returns:
        (transcript, method) where method is "api", "alternative" or "none".
    """
    for method, fetcher in (
        ("api", _fetch_from_transcript_api),
        ("alternative", _fetch_from_alt_service),
    ):
        try:
            transcript = fetcher(video_id, language)
        except (requests.RequestException, ValueError) as e:
            logger.warning("Transcript method %s failed for %s: %s", method, video_id, e)
            continue
        if transcript:
            return transcript, method
    return "", "none"
