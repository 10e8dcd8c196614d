from abc import ABC, abstractmethod
from typing import Any


class ChatCompletionPort(ABC):
    @abstractmethod
    def complete(self, request: dict[str, Any]) -> dict[str, Any]:
        """
        Forward one chat-completion request to the provider.

        Requirements:
        - Exactly one upstream call; no retries
        - Return the provider's JSON body unchanged

        Raises:
            UpstreamError: provider answered with a non-success status (status and body kept)
            TransportError: provider could not be reached
        """
        raise NotImplementedError
