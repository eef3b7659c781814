import logging
import re
from collections import Counter
from pathlib import Path

from chat_summarizer.services.parsing.types import DateRange, Message, ParseResult, Stats

logger = logging.getLogger(__name__)

_DAY_MONTH_YEAR = r"[0-9]{1,2}/[0-9]{1,2}/[0-9]{2}(?:[0-9]{2})?"
_ISO_DATE = r"[0-9]{4}-[0-9]{1,2}-[0-9]{1,2}"
_CLOCK = r"[0-9]{1,2}:[0-9]{2}(?::[0-9]{2})?"
_MERIDIEM = r"(?:\s*[AaPp][Mm])?"
_DASH = r"\s*[-–]\s*"
_SENDER_MESSAGE = r"(.+?):\s(.*)"

# Order matters: a line is tested against each shape in turn and the first match wins.
HEADER_PATTERNS: tuple[re.Pattern[str], ...] = (
    # 12/5/23, 9:05 PM - Alice: text
    re.compile(rf"^({_DAY_MONTH_YEAR}),?\s+({_CLOCK}{_MERIDIEM}){_DASH}{_SENDER_MESSAGE}$"),
    # [12/5/23, 21:05:33] Alice: text
    re.compile(rf"^\[({_DAY_MONTH_YEAR}),?\s+({_CLOCK}{_MERIDIEM})\]\s*{_SENDER_MESSAGE}$"),
    # 2023-12-05 21:05 - Alice: text
    re.compile(rf"^({_ISO_DATE}),?\s+({_CLOCK}){_DASH}{_SENDER_MESSAGE}$"),
)

SYSTEM_PATTERNS: tuple[re.Pattern[str], ...] = tuple(
    re.compile(pattern, re.IGNORECASE)
    for pattern in (
        r"messages and calls are end-to-end encrypted",
        r"created group",
        r"added you",
        r"left$",
        r"removed$",
        r"changed the subject",
        r"changed this group",
        r"changed the group",
        r"joined using this group",
    )
)


def match_header(line: str) -> tuple[str, str, str, str] | None:
    """Return the trimmed (date, time, sender, message) groups of a header line, or None."""
    for pattern in HEADER_PATTERNS:
        match = pattern.match(line)
        if match:
            date_part, time_part, sender, text = (group.strip() for group in match.groups())
            if not sender:
                return None
            return date_part, time_part, sender, text
    return None


def is_system_message(message: Message) -> bool:
    return any(pattern.search(message.message) for pattern in SYSTEM_PATTERNS)


def build_stats(messages: list[Message]) -> Stats:
    senders = Counter(message.sender for message in messages)
    date_range = DateRange(start=messages[0].date, end=messages[-1].date) if messages else None
    return Stats(total=len(messages), senders=dict(senders), date_range=date_range)


def _assemble(lines: list[str]) -> list[Message]:
    assembled: list[Message] = []
    current: Message | None = None

    for raw_line in lines:
        line = raw_line.strip()
        if not line:
            continue
        header = match_header(line)
        if header is not None:
            if current is not None:
                assembled.append(current)
            current = Message(*header)
        elif current is not None:
            current.message = f"{current.message}\n{line}"

    if current is not None:
        assembled.append(current)
    return assembled


def parse_whatsapp_text(raw_text: object) -> ParseResult:
    """Parse an exported WhatsApp transcript into messages and per-sender stats.

    Never raises for malformed input: lines before the first header are
    dropped, non-header lines extend the open message, and system
    notifications are filtered out before the stats are computed.
    """
    if not isinstance(raw_text, str) or not raw_text:
        return ParseResult()

    lines = raw_text.split("\n")
    assembled = _assemble(lines)
    messages = [message for message in assembled if not is_system_message(message)]

    logger.debug(
        "transcript_parsed",
        extra={
            "line_count": len(lines),
            "record_count": len(assembled),
            "system_dropped": len(assembled) - len(messages),
        },
    )
    return ParseResult(messages=messages, stats=build_stats(messages))


def parse_whatsapp_file(path: str | Path) -> ParseResult:
    raw_text = Path(path).read_text(encoding="utf-8", errors="replace")
    return parse_whatsapp_text(raw_text)
