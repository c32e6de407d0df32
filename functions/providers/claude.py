import logging
import time

import anthropic

from providers.exceptions import ProviderError, ProviderInvalidResponseError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-haiku-4-5"
REQUEST_TIMEOUT = 60  # seconds


def call_claude(
    prompt: str,
    *,
    api_key: str,
    max_tokens: int = 2000,
    model: str = DEFAULT_MODEL,
    temperature: float | None = None,
) -> str:
    """
    Sends a single user message to Claude and returns the text of the reply.

    One attempt only; the SDK's own retries are disabled.

    Raises:
        ProviderError: If the API call fails.
        ProviderInvalidResponseError: If the reply has no text.
    """
    if not api_key:
        raise ProviderError("Claude API key not configured")

    client = anthropic.Anthropic(
        api_key=api_key, timeout=REQUEST_TIMEOUT, max_retries=0
    )
    kwargs = {}
    if temperature is not None:
        kwargs["temperature"] = temperature

    start_time = time.time()
    truncated_prompt = (prompt[:200] + "...") if len(prompt) > 200 else prompt
    logger.debug("Calling Claude, prompt: '%s'", truncated_prompt)
    try:
        response = client.messages.create(
            model=model,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": prompt}],
            **kwargs,
        )
    except anthropic.APIStatusError as e:
        raise ProviderError(f"Claude API error: {e.status_code}") from e
    except anthropic.APIError as e:
        raise ProviderError(f"Claude API error: {e}") from e
    logger.debug("Claude call took: %.2fs", time.time() - start_time)

    text = "".join(
        block.text for block in response.content if getattr(block, "type", "") == "text"
    )
    if not text:
        raise ProviderInvalidResponseError("Claude returned an empty response")
    return text
