from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from typing import Any

from routine_builder.domain.entities.chat_message import ChatMessage


class ChatRelayPort(ABC):
    @abstractmethod
    async def relay(self, transcript: Sequence[ChatMessage], use_web_search: bool) -> dict[str, Any]:
        """
        Send the transcript through the relay and return the provider's body.

        The body is returned as-is; extracting the reply text is the caller's job.

        Raises:
            UpstreamError: the relay (or provider) answered with a non-success status
            TransportError: the relay could not be reached or returned a non-JSON body
        """
        raise NotImplementedError
