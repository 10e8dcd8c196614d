from __future__ import annotations

from dataclasses import dataclass

from routine_builder.domain.entities.chat_message import ChatMessage


@dataclass(frozen=True)
class PersistSelection:
    product_ids: tuple[int, ...]


@dataclass(frozen=True)
class RenderView:
    pass


@dataclass(frozen=True)
class CallRelay:
    transcript: tuple[ChatMessage, ...]
    use_web_search: bool
    purpose: str  # "routine" | "follow_up"


Effect = PersistSelection | RenderView | CallRelay
