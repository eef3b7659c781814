from chat_summarizer.services.parsing.types import DateRange, Message, ParseResult, Stats
from chat_summarizer.services.parsing.whatsapp import (
    is_system_message,
    match_header,
    parse_whatsapp_file,
    parse_whatsapp_text,
)

__all__ = [
    "DateRange",
    "Message",
    "ParseResult",
    "Stats",
    "is_system_message",
    "match_header",
    "parse_whatsapp_file",
    "parse_whatsapp_text",
]
