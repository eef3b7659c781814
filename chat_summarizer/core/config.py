from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False)

    app_name: str = "WhatsApp Chat Summarizer API"
    environment: Literal["dev", "test", "prod"] = "dev"
    debug: bool = False

    database_url: str = "sqlite:///./chat_summarizer.db"
    encryption_key: str = "aLxM0wHk0w0oVx3G9iYfn7lr5J2v3xH5cM8D6lQ1t2Q="

    cors_origins: list[str] = Field(default_factory=lambda: ["http://localhost:3000", "http://127.0.0.1:3000"])
    max_upload_size_mb: int = 15
    preview_limit: int = 200
    config_namespace: str = "whatsapp_summarizer_config"

    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    gemini_model: str = "gemini-2.0-flash"
    gemini_temperature: float = 0.4
    gemini_max_output_tokens: int = 2048

    sheets_base_url: str = "https://sheets.googleapis.com/v4"
    sheets_range: str = "Sheet1!A1"

    firestore_base_url: str = "https://firestore.googleapis.com/v1"
    firestore_collection: str = "whatsapp_messages"
    supabase_table: str = "whatsapp_messages"
    document_batch_size: int = Field(default=20, ge=1)

    http_timeout_seconds: float = 30.0
    auto_create_tables: bool = True


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
