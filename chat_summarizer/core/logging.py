import logging


class PrivacyFilter(logging.Filter):
    """Drop chat content and credentials from structured logs."""

    BLOCKED_KEYS = {"text", "message_text", "chat_text", "summary_text", "api_key", "credentials"}

    def filter(self, record: logging.LogRecord) -> bool:
        for key in self.BLOCKED_KEYS:
            if hasattr(record, key):
                setattr(record, key, "[REDACTED]")
        return True


def configure_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
    for handler in logging.getLogger().handlers:
        if not any(isinstance(existing, PrivacyFilter) for existing in handler.filters):
            handler.addFilter(PrivacyFilter())
    logging.getLogger("httpx").setLevel(logging.WARNING)
