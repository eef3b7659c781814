from dataclasses import asdict, dataclass, field


@dataclass(slots=True)
class Message:
    date: str
    time: str
    sender: str
    message: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(slots=True, frozen=True)
class DateRange:
    start: str
    end: str

    def to_dict(self) -> dict:
        return {"from": self.start, "to": self.end}


@dataclass(slots=True)
class Stats:
    total: int = 0
    senders: dict[str, int] = field(default_factory=dict)
    date_range: DateRange | None = None

    def to_dict(self) -> dict:
        payload: dict = {"total": self.total, "senders": dict(self.senders)}
        if self.date_range is not None:
            payload["dateRange"] = self.date_range.to_dict()
        return payload


@dataclass(slots=True)
class ParseResult:
    messages: list[Message] = field(default_factory=list)
    stats: Stats = field(default_factory=Stats)

    def to_dict(self) -> dict:
        return {
            "messages": [message.to_dict() for message in self.messages],
            "stats": self.stats.to_dict(),
        }
