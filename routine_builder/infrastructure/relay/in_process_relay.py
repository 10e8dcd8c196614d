from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from routine_builder.application.ports.chat_relay import ChatRelayPort
from routine_builder.application.use_cases.relay_chat import RelayChatUseCase
from routine_builder.domain.entities.chat_message import ChatMessage


class InProcessChatRelay(ChatRelayPort):
    """Runs the relay use case in this process instead of over HTTP (local harness)."""

    def __init__(self, use_case: RelayChatUseCase) -> None:
        self._use_case = use_case

    async def relay(self, transcript: Sequence[ChatMessage], use_web_search: bool) -> dict[str, Any]:
        payload = {
            "messages": [m.to_payload() for m in transcript],
            "webSearch": use_web_search,
        }
        return await asyncio.to_thread(self._use_case.execute, payload)
