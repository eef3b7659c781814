import logging
from collections.abc import Mapping, Sequence

import httpx

from chat_summarizer.core.config import get_settings
from chat_summarizer.core.errors import ConfigurationMissingError, UpstreamError
from chat_summarizer.services.http import build_client, ensure_success, google_key_header
from chat_summarizer.services.parsing.types import Message

logger = logging.getLogger(__name__)

NO_SUMMARY_FALLBACK = "No summary generated."
GEMINI_ERROR_FALLBACK = "Gemini API error"

SUMMARY_PROMPT = """You are a helpful assistant. Summarize the following WhatsApp conversation.
Provide:
1. A brief overview (2-3 sentences)
2. Key topics discussed
3. Action items or decisions made (if any)
4. Notable mentions or important details

Format your response with clear headings using ### for sections.

Chat:
{chat_text}"""


def render_transcript(messages: Sequence[Message]) -> str:
    return "\n".join(f"[{m.date} {m.time}] {m.sender}: {m.message}" for m in messages)


def build_prompt(messages: Sequence[Message]) -> str:
    return SUMMARY_PROMPT.format(chat_text=render_transcript(messages))


def summarize_chat(
    messages: Sequence[Message],
    config: Mapping[str, str],
    client: httpx.Client | None = None,
) -> str:
    api_key = config.get("geminiKey")
    if not api_key:
        raise ConfigurationMissingError("Gemini API key not configured. Go to Settings.")

    settings = get_settings()
    url = f"{settings.gemini_base_url}/models/{settings.gemini_model}:generateContent"
    body = {
        "contents": [{"parts": [{"text": build_prompt(messages)}]}],
        "generationConfig": {
            "temperature": settings.gemini_temperature,
            "maxOutputTokens": settings.gemini_max_output_tokens,
        },
    }

    owns_client = client is None
    http = client or build_client()
    try:
        response = http.post(url, headers=google_key_header(api_key), json=body)
    except httpx.HTTPError as exc:
        logger.warning("summary_request_failed", extra={"model": settings.gemini_model, "error": str(exc)})
        raise UpstreamError(GEMINI_ERROR_FALLBACK) from exc
    finally:
        if owns_client:
            http.close()

    ensure_success(response, GEMINI_ERROR_FALLBACK)
    logger.info("summary_generated", extra={"model": settings.gemini_model, "message_count": len(messages)})
    try:
        payload = response.json()
    except ValueError:
        payload = None
    return _first_candidate_text(payload)


def _first_candidate_text(payload: object) -> str:
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]  # type: ignore[index]
    except (KeyError, IndexError, TypeError):
        return NO_SUMMARY_FALLBACK
    return str(text) if text else NO_SUMMARY_FALLBACK
