from typing import Literal

from pydantic import BaseModel, field_validator


class ConfigUpdate(BaseModel):
    geminiKey: str | None = None
    sheetId: str | None = None
    sheetsApiKey: str | None = None
    fbApiKey: str | None = None
    fbProjectId: str | None = None
    fbAuthDomain: str | None = None
    sbUrl: str | None = None
    sbAnonKey: str | None = None

    model_config = {"extra": "forbid"}

    @field_validator("*")
    @classmethod
    def strip_value(cls, value: str | None) -> str | None:
        return value.strip() if isinstance(value, str) else value

    def updates(self) -> dict[str, str]:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class ConfigRead(BaseModel):
    provider: Literal["firebase", "supabase"]
    config: dict[str, str]


class ProviderPayload(BaseModel):
    provider: Literal["firebase", "supabase"]
