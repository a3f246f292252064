"""Pydantic models describing raw provider event payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sportspack.domain.model import SyncRecord


def _strip(value: object) -> object:
    if isinstance(value, str):
        return value.strip()
    # some feeds send numeric ids
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    return value


class ProviderBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)


class EventPayload(ProviderBaseModel):
    remote_id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    content: str = ""

    @field_validator("remote_id", "title", mode="before")
    @classmethod
    def _normalize_required(cls, value: object) -> object:
        return _strip(value)

    @field_validator("content", mode="before")
    @classmethod
    def _normalize_content(cls, value: object) -> object:
        if value is None:
            return ""
        return _strip(value)

    def to_record(self) -> SyncRecord:
        return SyncRecord(remote_id=self.remote_id, title=self.title, content=self.content)
