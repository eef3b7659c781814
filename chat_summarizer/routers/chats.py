import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from sqlalchemy.orm import Session

from chat_summarizer.core.config import get_settings
from chat_summarizer.core.errors import ConfigurationMissingError, IntegrationError
from chat_summarizer.db.session import get_db
from chat_summarizer.schemas.chat import (
    DocumentExportResponse,
    MessageSchema,
    MessagesRequest,
    ParseResponse,
    SheetsExportResponse,
    StatsSchema,
    SummaryResponse,
)
from chat_summarizer.services.config_store import ConfigStore
from chat_summarizer.services.llm import summarize_chat
from chat_summarizer.services.parsing import parse_whatsapp_text
from chat_summarizer.services.parsing.types import Message
from chat_summarizer.services.sinks import append_rows, save_messages
from chat_summarizer.services.uploads import read_upload_text

router = APIRouter(prefix="/chats", tags=["chats"])
logger = logging.getLogger(__name__)


def _integration_error(exc: IntegrationError) -> HTTPException:
    if isinstance(exc, ConfigurationMissingError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(exc))


def _require_messages(payload: MessagesRequest) -> list[Message]:
    if not payload.messages:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No messages to process.")
    return payload.to_messages()


@router.post("/parse", response_model=ParseResponse, response_model_exclude_none=True)
async def parse_chat(
    file: UploadFile | None = File(default=None),
    text: str | None = Form(default=None),
) -> ParseResponse:
    raw_text = await read_upload_text(file) if file is not None else (text or "")
    if not raw_text.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Upload a .txt export or paste chat text.")

    result = parse_whatsapp_text(raw_text)
    if result.stats.total == 0:
        logger.info("parse_no_messages", extra={"input_chars": len(raw_text)})

    limit = get_settings().preview_limit
    return ParseResponse(
        messages=[MessageSchema.model_validate(message) for message in result.messages[:limit]],
        stats=StatsSchema.model_validate(result.stats.to_dict()),
        truncated=max(0, result.stats.total - limit),
    )


@router.post("/summarize", response_model=SummaryResponse)
def summarize(payload: MessagesRequest, db: Session = Depends(get_db)) -> SummaryResponse:
    messages = _require_messages(payload)
    config = ConfigStore(db).get_config()
    try:
        summary = summarize_chat(messages, config)
    except IntegrationError as exc:
        raise _integration_error(exc) from exc
    return SummaryResponse(summary=summary, generated_at=datetime.now(timezone.utc))


@router.post("/export/sheets", response_model=SheetsExportResponse)
def export_to_sheets(payload: MessagesRequest, db: Session = Depends(get_db)) -> SheetsExportResponse:
    messages = _require_messages(payload)
    config = ConfigStore(db).get_config()
    try:
        response = append_rows(messages, config)
    except IntegrationError as exc:
        raise _integration_error(exc) from exc
    return SheetsExportResponse(saved=len(messages), response=response)


@router.post("/export/db", response_model=DocumentExportResponse)
async def export_to_document_store(payload: MessagesRequest, db: Session = Depends(get_db)) -> DocumentExportResponse:
    messages = _require_messages(payload)
    store = ConfigStore(db)
    try:
        result = await save_messages(messages, store.get_config(), store.get_provider())
    except IntegrationError as exc:
        raise _integration_error(exc) from exc
    return DocumentExportResponse(**result)
