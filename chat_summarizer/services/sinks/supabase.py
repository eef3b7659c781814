import logging
from collections.abc import Mapping, Sequence

import httpx

from chat_summarizer.core.config import get_settings
from chat_summarizer.core.errors import ConfigurationMissingError, UpstreamError
from chat_summarizer.services.http import ensure_success, plain_error_message
from chat_summarizer.services.parsing.types import Message

logger = logging.getLogger(__name__)

SUPABASE_ERROR_FALLBACK = "Supabase API error"


def to_row(message: Message) -> dict:
    return {"date": message.date, "time": message.time, "sender": message.sender, "message": message.message}


class SupabaseBackend:
    """Bulk-inserts rows through the PostgREST endpoint; ``created_at`` is left to the table default."""

    name = "supabase"

    def __init__(self, base_url: str, anon_key: str, table: str | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self.table = table or get_settings().supabase_table

    @classmethod
    def from_config(cls, config: Mapping[str, str]) -> "SupabaseBackend":
        base_url = config.get("sbUrl")
        anon_key = config.get("sbAnonKey")
        if not base_url or not anon_key:
            raise ConfigurationMissingError("Supabase not configured. Go to Settings.")
        return cls(base_url, anon_key)

    @property
    def headers(self) -> dict[str, str]:
        return {
            "apikey": self.anon_key,
            "Authorization": f"Bearer {self.anon_key}",
            "Prefer": "return=minimal",
        }

    async def write_batch(self, client: httpx.AsyncClient, batch: Sequence[Message]) -> None:
        url = f"{self.base_url}/rest/v1/{self.table}"
        try:
            response = await client.post(url, headers=self.headers, json=[to_row(m) for m in batch])
        except httpx.HTTPError as exc:
            logger.warning("supabase_write_failed", extra={"table": self.table, "error": str(exc)})
            raise UpstreamError(SUPABASE_ERROR_FALLBACK) from exc
        ensure_success(response, SUPABASE_ERROR_FALLBACK, extract=plain_error_message)
