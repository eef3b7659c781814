from datetime import datetime

from pydantic import BaseModel, Field

from chat_summarizer.services.parsing.types import Message


class MessageSchema(BaseModel):
    date: str = Field(min_length=1)
    time: str = Field(min_length=1)
    sender: str = Field(min_length=1)
    message: str

    model_config = {"from_attributes": True}

    def to_message(self) -> Message:
        return Message(date=self.date, time=self.time, sender=self.sender, message=self.message)


class DateRangeSchema(BaseModel):
    start: str = Field(alias="from")
    end: str = Field(alias="to")

    model_config = {"populate_by_name": True}


class StatsSchema(BaseModel):
    total: int
    senders: dict[str, int]
    date_range: DateRangeSchema | None = Field(default=None, alias="dateRange")

    model_config = {"populate_by_name": True}


class ParseResponse(BaseModel):
    messages: list[MessageSchema]
    stats: StatsSchema
    truncated: int = 0


class MessagesRequest(BaseModel):
    messages: list[MessageSchema] = Field(default_factory=list)

    def to_messages(self) -> list[Message]:
        return [row.to_message() for row in self.messages]


class SummaryResponse(BaseModel):
    summary: str
    generated_at: datetime


class SheetsExportResponse(BaseModel):
    saved: int
    response: dict


class DocumentExportResponse(BaseModel):
    saved: int
    provider: str
