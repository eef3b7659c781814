from chat_summarizer.services.llm.gemini_client import summarize_chat

__all__ = ["summarize_chat"]
