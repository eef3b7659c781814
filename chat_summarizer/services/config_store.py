"""Persisted user configuration: API credentials, sheet ids and the storage provider.

The whole mapping lives in one ``config_entries`` row keyed by the configured
namespace. Credential values are encrypted at rest.
"""

import logging
from collections.abc import Mapping

from sqlalchemy import select
from sqlalchemy.orm import Session

from chat_summarizer.core.config import get_settings
from chat_summarizer.core.security import SECRET_KEYS, decrypt_text, encrypt_text
from chat_summarizer.models.config_entry import ConfigEntry

logger = logging.getLogger(__name__)

PROVIDERS = ("firebase", "supabase")
DEFAULT_PROVIDER = "firebase"


class ConfigStore:
    def __init__(self, db: Session, namespace: str | None = None) -> None:
        self.db = db
        self.namespace = namespace or get_settings().config_namespace

    def _entry(self) -> ConfigEntry | None:
        return self.db.scalar(select(ConfigEntry).where(ConfigEntry.key == self.namespace))

    def _load(self) -> tuple[dict[str, str], dict[str, str]]:
        """Return the readable config and the raw ciphertext of secrets that failed to decrypt."""
        entry = self._entry()
        if entry is None or not isinstance(entry.value_json, dict):
            return {}, {}
        config: dict[str, str] = {}
        unreadable: dict[str, str] = {}
        for key, value in entry.value_json.items():
            if key in SECRET_KEYS:
                try:
                    value = decrypt_text(str(value))
                except ValueError:
                    logger.warning("config_secret_unreadable", extra={"namespace": self.namespace, "key": key})
                    unreadable[key] = str(value)
                    continue
            config[key] = str(value)
        return config, unreadable

    def get_config(self) -> dict[str, str]:
        return self._load()[0]

    def save_config(self, updates: Mapping[str, str]) -> dict[str, str]:
        current, unreadable = self._load()
        merged = {**current, **{key: str(value) for key, value in updates.items()}}
        # Ciphertext we cannot read is kept as-is until the key is overwritten.
        stored = {key: value for key, value in unreadable.items() if key not in merged}
        stored.update({key: encrypt_text(value) if key in SECRET_KEYS else value for key, value in merged.items()})

        entry = self._entry()
        if entry is None:
            entry = ConfigEntry(key=self.namespace, value_json=stored)
        else:
            entry.value_json = stored
        self.db.add(entry)
        self.db.commit()
        logger.info("config_saved", extra={"namespace": self.namespace, "keys": sorted(updates)})
        return merged

    def get_provider(self) -> str:
        provider = self.get_config().get("provider")
        return provider if provider in PROVIDERS else DEFAULT_PROVIDER

    def set_provider(self, provider: str) -> None:
        if provider not in PROVIDERS:
            raise ValueError(f"Unsupported storage provider: {provider}")
        self.save_config({"provider": provider})
