"""
Chat-completions wrapper shared by OpenAI and OpenAI-compatible providers (Grok).
"""

import logging
import time
from typing import Optional

import openai
from openai import OpenAI

from providers.exceptions import ProviderError, ProviderInvalidResponseError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gpt-4o-mini"
REQUEST_TIMEOUT = 60  # seconds


def call_chat(
    messages: list[dict],
    *,
    api_key: str,
    model: str = DEFAULT_MODEL,
    temperature: float = 0.7,
    max_tokens: Optional[int] = None,
    json_mode: bool = False,
    base_url: Optional[str] = None,
) -> str:
    """
    Runs one chat completion and returns the first choice's message content.

    Args:
        messages: OpenAI-style `{"role", "content"}` dicts.
        json_mode: Ask for a `json_object` response format.
        base_url: Override for OpenAI-compatible endpoints such as x.ai.

    Raises:
        ProviderError: If the API call fails.
        ProviderInvalidResponseError: If the completion has no content.
    """
    if not api_key:
        raise ProviderError("OpenAI API key not configured")

    client = OpenAI(
        api_key=api_key,
        base_url=base_url,
        timeout=REQUEST_TIMEOUT,
        max_retries=0,
    )
    kwargs = {}
    if max_tokens is not None:
        kwargs["max_tokens"] = max_tokens
    if json_mode:
        kwargs["response_format"] = {"type": "json_object"}

    start_time = time.time()
    try:
        completion = client.chat.completions.create(
            model=model,
            messages=messages,
            temperature=temperature,
            **kwargs,
        )
    except openai.APIStatusError as e:
        raise ProviderError(f"{model} API error: {e.status_code}") from e
    except openai.OpenAIError as e:
        raise ProviderError(f"{model} API error: {e}") from e
    logger.debug("%s chat call took: %.2fs", model, time.time() - start_time)

    if not completion.choices or not completion.choices[0].message.content:
        raise ProviderInvalidResponseError(f"{model} returned an empty response")
    return completion.choices[0].message.content
