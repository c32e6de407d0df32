import requests

from providers.exceptions import ProviderError, ProviderInvalidResponseError

PDF_CO_URL = "https://api.pdf.co/v1/pdf/convert/to/text"
REQUEST_TIMEOUT = 30  # seconds


def convert_to_text(file_data: str, max_pages: int, api_key: str) -> str:
    """Converts the first `max_pages` pages of a base64 PDF to plain text."""
    try:
        response = requests.post(
            PDF_CO_URL,
            headers={"x-api-key": api_key},
            json={"file": file_data, "pages": f"1-{max_pages}", "inline": True},
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        raise ProviderError(f"PDF.co error: {e}") from e

    if not response.ok:
        raise ProviderError(f"PDF.co error: {response.status_code}")

    try:
        payload = response.json()
    except ValueError as e:
        raise ProviderInvalidResponseError(f"PDF.co returned invalid JSON: {e}") from e
    body = payload.get("body") if isinstance(payload, dict) else None
    if not body or not isinstance(body, str):
        raise ProviderInvalidResponseError("PDF.co returned no text")
    return body
