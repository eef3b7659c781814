from collections.abc import Callable

import httpx

from chat_summarizer.core.config import get_settings
from chat_summarizer.core.errors import UpstreamError


def build_client() -> httpx.Client:
    return httpx.Client(timeout=get_settings().http_timeout_seconds)


def build_async_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=get_settings().http_timeout_seconds)


def google_key_header(api_key: str) -> dict[str, str]:
    # Never put the key in the URL: request lines are logged.
    return {"x-goog-api-key": api_key}


def google_error_message(response: httpx.Response) -> str | None:
    """Pull ``error.message`` out of a Google API error body."""
    try:
        payload = response.json()
    except ValueError:
        return None
    if not isinstance(payload, dict):
        return None
    error = payload.get("error")
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return None


def plain_error_message(response: httpx.Response) -> str | None:
    return response.text.strip() or None


def ensure_success(
    response: httpx.Response,
    fallback: str,
    extract: Callable[[httpx.Response], str | None] = google_error_message,
) -> None:
    if response.is_success:
        return
    raise UpstreamError(extract(response) or fallback, status_code=response.status_code)
