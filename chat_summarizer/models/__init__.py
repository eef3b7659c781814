from chat_summarizer.models.config_entry import ConfigEntry

__all__ = ["ConfigEntry"]
