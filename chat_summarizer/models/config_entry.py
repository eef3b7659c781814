from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from chat_summarizer.db.base import Base
from chat_summarizer.models.common import TimestampMixin


class ConfigEntry(TimestampMixin, Base):
    __tablename__ = "config_entries"

    key: Mapped[str] = mapped_column(String(128), primary_key=True)
    value_json: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
