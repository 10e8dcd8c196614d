from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

import httpx

from routine_builder.application.exceptions import TransportError, UpstreamError
from routine_builder.application.ports.chat_relay import ChatRelayPort
from routine_builder.domain.entities.chat_message import ChatMessage


class HttpChatRelayClient(ChatRelayPort):
    def __init__(self, relay_url: str, client: httpx.AsyncClient | None = None, timeout: float = 60.0) -> None:
        self._relay_url = relay_url
        self._client = client or httpx.AsyncClient(timeout=timeout)
        self._logger = logging.getLogger(__name__)

    async def relay(self, transcript: Sequence[ChatMessage], use_web_search: bool) -> dict[str, Any]:
        payload = {
            "messages": [m.to_payload() for m in transcript],
            "webSearch": use_web_search,
        }
        try:
            resp = await self._client.post(self._relay_url, json=payload)
        except httpx.HTTPError as e:
            self._logger.error("Relay unreachable", extra={"reason": str(e)})
            raise TransportError(str(e)) from e

        if resp.status_code >= 400:
            self._logger.error(
                "Relay returned an error",
                extra={"status_code": resp.status_code, "message_count": len(transcript)},
            )
            raise UpstreamError(status_code=resp.status_code, details=resp.text)

        try:
            data = resp.json()
        except ValueError as e:
            raise TransportError("Relay returned a non-JSON body") from e
        return data if isinstance(data, dict) else {}
