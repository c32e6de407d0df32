import logging
from typing import Optional

import requests

from providers.exceptions import ProviderError, ProviderInvalidResponseError

logger = logging.getLogger(__name__)

VISION_URL = "https://vision.googleapis.com/v1/images:annotate"
REQUEST_TIMEOUT = 30  # seconds


def detect_text(image_content: str, api_key: str) -> Optional[str]:
    """
    Runs TEXT_DETECTION on a base64 image.

    Args:
        image_content (str): Base64 image bytes, without any data URL prefix.
        api_key (str): Google Cloud API key with Vision enabled.

    Returns:
        The full detected text, or None when Vision found no text.
    """
    payload = {
        "requests": [
            {
                "image": {"content": image_content},
                "features": [{"type": "TEXT_DETECTION", "maxResults": 1}],
            }
        ]
    }
    try:
        response = requests.post(
            VISION_URL,
            params={"key": api_key},
            json=payload,
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        raise ProviderError(f"Vision API error: {e}") from e

    if not response.ok:
        raise ProviderError(f"Vision API error: {response.reason}")

    try:
        payload = response.json()
    except ValueError as e:
        raise ProviderInvalidResponseError(f"Vision API returned invalid JSON: {e}") from e
    if not isinstance(payload, dict):
        raise ProviderInvalidResponseError("Vision API returned an unexpected payload")
    responses = payload.get("responses")
    first = responses[0] if isinstance(responses, list) and responses else None
    annotations = first.get("textAnnotations") if isinstance(first, dict) else None
    if not annotations:
        return None
    return annotations[0].get("description")
