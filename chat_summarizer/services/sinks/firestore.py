import asyncio
import logging
from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from urllib.parse import quote

import httpx

from chat_summarizer.core.config import get_settings
from chat_summarizer.core.errors import ConfigurationMissingError, UpstreamError
from chat_summarizer.services.http import ensure_success, google_key_header
from chat_summarizer.services.parsing.types import Message

logger = logging.getLogger(__name__)

FIREBASE_ERROR_FALLBACK = "Firebase API error"


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_document(message: Message, written_at: str) -> dict:
    return {
        "fields": {
            "date": {"stringValue": message.date},
            "time": {"stringValue": message.time},
            "sender": {"stringValue": message.sender},
            "message": {"stringValue": message.message},
            "createdAt": {"timestampValue": written_at},
        }
    }


class FirestoreBackend:
    """Writes one Firestore document per message through the REST API."""

    name = "firebase"

    def __init__(self, project_id: str, api_key: str, collection: str | None = None) -> None:
        settings = get_settings()
        self.project_id = project_id
        self.api_key = api_key
        self.collection = collection or settings.firestore_collection
        self.url = (
            f"{settings.firestore_base_url}/projects/{quote(project_id, safe='')}"
            f"/databases/(default)/documents/{self.collection}"
        )

    @classmethod
    def from_config(cls, config: Mapping[str, str]) -> "FirestoreBackend":
        project_id = config.get("fbProjectId")
        api_key = config.get("fbApiKey")
        if not project_id or not api_key:
            raise ConfigurationMissingError("Firebase not configured. Go to Settings.")
        return cls(project_id, api_key)

    async def write_batch(self, client: httpx.AsyncClient, batch: Sequence[Message]) -> None:
        written_at = _utc_timestamp()
        results = await asyncio.gather(
            *(self._write_document(client, to_document(m, written_at)) for m in batch),
            return_exceptions=True,
        )
        for result in results:
            if isinstance(result, BaseException):
                raise result

    async def _write_document(self, client: httpx.AsyncClient, document: dict) -> None:
        try:
            response = await client.post(self.url, headers=google_key_header(self.api_key), json=document)
        except httpx.HTTPError as exc:
            logger.warning("firestore_write_failed", extra={"project_id": self.project_id, "error": str(exc)})
            raise UpstreamError(FIREBASE_ERROR_FALLBACK) from exc
        ensure_success(response, FIREBASE_ERROR_FALLBACK)
