from chat_summarizer.services.sinks.document_store import save_messages
from chat_summarizer.services.sinks.sheets import append_rows

__all__ = ["append_rows", "save_messages"]
