from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RelayMessageDTO(BaseModel):
    role: str
    content: str


class RelayRequestDTO(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    messages: list[RelayMessageDTO] = Field(default_factory=list)
    web_search: bool = Field(default=False, alias="webSearch")

    @field_validator("web_search", mode="before")
    @classmethod
    def _truthy(cls, value: Any) -> bool:
        return bool(value)

    def message_payloads(self) -> list[dict[str, str]]:
        return [m.model_dump() for m in self.messages]
