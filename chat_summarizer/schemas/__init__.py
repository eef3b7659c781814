from chat_summarizer.schemas.chat import (
    DateRangeSchema,
    DocumentExportResponse,
    MessageSchema,
    MessagesRequest,
    ParseResponse,
    SheetsExportResponse,
    StatsSchema,
    SummaryResponse,
)
from chat_summarizer.schemas.settings import ConfigRead, ConfigUpdate, ProviderPayload

__all__ = [
    "MessageSchema",
    "DateRangeSchema",
    "StatsSchema",
    "ParseResponse",
    "MessagesRequest",
    "SummaryResponse",
    "SheetsExportResponse",
    "DocumentExportResponse",
    "ConfigRead",
    "ConfigUpdate",
    "ProviderPayload",
]
