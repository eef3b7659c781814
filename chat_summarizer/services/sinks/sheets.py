import logging
from collections.abc import Mapping, Sequence
from urllib.parse import quote

import httpx

from chat_summarizer.core.config import get_settings
from chat_summarizer.core.errors import ConfigurationMissingError, UpstreamError
from chat_summarizer.services.http import build_client, ensure_success, google_key_header
from chat_summarizer.services.parsing.types import Message

logger = logging.getLogger(__name__)

SHEETS_ERROR_FALLBACK = "Google Sheets API error"


def to_row(message: Message) -> list[str]:
    return [message.date, message.time, message.sender, message.message]


def append_rows(
    messages: Sequence[Message],
    config: Mapping[str, str],
    client: httpx.Client | None = None,
) -> dict:
    sheet_id = config.get("sheetId")
    api_key = config.get("sheetsApiKey")
    if not sheet_id or not api_key:
        raise ConfigurationMissingError("Google Sheets not configured. Go to Settings.")

    settings = get_settings()
    url = (
        f"{settings.sheets_base_url}/spreadsheets/{quote(sheet_id, safe='')}"
        f"/values/{quote(settings.sheets_range, safe='!:')}:append"
    )
    params = {"valueInputOption": "USER_ENTERED"}
    body = {"values": [to_row(message) for message in messages]}

    owns_client = client is None
    http = client or build_client()
    try:
        response = http.post(url, params=params, headers=google_key_header(api_key), json=body)
    except httpx.HTTPError as exc:
        logger.warning("sheets_append_failed", extra={"sheet_id": sheet_id, "error": str(exc)})
        raise UpstreamError(SHEETS_ERROR_FALLBACK) from exc
    finally:
        if owns_client:
            http.close()

    ensure_success(response, SHEETS_ERROR_FALLBACK)
    logger.info("sheets_rows_appended", extra={"sheet_id": sheet_id, "row_count": len(body["values"])})
    try:
        return response.json()
    except ValueError:
        return {}
