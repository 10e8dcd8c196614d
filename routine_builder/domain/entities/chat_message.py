from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    system = "system"
    user = "user"
    assistant = "assistant"


@dataclass(frozen=True)
class ChatMessage:
    role: Role
    content: str

    def to_payload(self) -> dict[str, str]:
        return {"role": self.role.value, "content": self.content}


@dataclass(frozen=True)
class ChatBubble:
    """One entry of the conversation as shown to the user."""

    speaker: str  # "user" | "ai"
    text: str
