"""Route parsed messages to the selected document store in fixed-size rounds.

Rounds run one after another; the requests inside a round run concurrently.
A failure aborts the remaining rounds and leaves earlier rounds written.
"""

import logging
from collections.abc import Iterator, Mapping, Sequence
from typing import Protocol

import httpx

from chat_summarizer.core.config import get_settings
from chat_summarizer.services.http import build_async_client
from chat_summarizer.services.parsing.types import Message
from chat_summarizer.services.sinks.firestore import FirestoreBackend
from chat_summarizer.services.sinks.supabase import SupabaseBackend

logger = logging.getLogger(__name__)


class DocumentBackend(Protocol):
    name: str

    async def write_batch(self, client: httpx.AsyncClient, batch: Sequence[Message]) -> None: ...


def resolve_backend(provider: str, config: Mapping[str, str]) -> DocumentBackend:
    if provider == "supabase":
        return SupabaseBackend.from_config(config)
    return FirestoreBackend.from_config(config)


def chunked(items: Sequence[Message], size: int) -> Iterator[Sequence[Message]]:
    for start in range(0, len(items), size):
        yield items[start : start + size]


async def save_messages(
    messages: Sequence[Message],
    config: Mapping[str, str],
    provider: str,
    client: httpx.AsyncClient | None = None,
) -> dict:
    backend = resolve_backend(provider, config)
    batch_size = get_settings().document_batch_size

    owns_client = client is None
    http = client or build_async_client()
    saved = 0
    try:
        for batch in chunked(messages, batch_size):
            await backend.write_batch(http, batch)
            saved += len(batch)
    except Exception:
        logger.warning("document_store_round_failed", extra={"provider": backend.name, "saved": saved})
        raise
    finally:
        if owns_client:
            await http.aclose()

    logger.info("document_store_saved", extra={"provider": backend.name, "saved": saved})
    return {"saved": saved, "provider": backend.name}
