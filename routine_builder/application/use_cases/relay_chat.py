from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from routine_builder.application.dto.relay_request import RelayRequestDTO
from routine_builder.application.exceptions import InvalidRelayRequestError
from routine_builder.application.ports.llm import ChatCompletionPort


class RelayChatUseCase:
    """Translate a client transcript into one upstream chat-completion call."""

    def __init__(
        self,
        upstream: ChatCompletionPort,
        default_model: str,
        web_search_model: str,
        temperature: float = 0.8,
        top_p: float = 1.0,
        web_search_max_results: int = 3,
    ) -> None:
        self._upstream = upstream
        self._default_model = default_model
        self._web_search_model = web_search_model
        self._temperature = temperature
        self._top_p = top_p
        self._web_search_max_results = web_search_max_results
        self._logger = logging.getLogger(__name__)

    def execute(self, payload: Any) -> dict[str, Any]:
        request = self.parse(payload)
        upstream_request = self.build_upstream_request(request.message_payloads(), request.web_search)
        self._logger.info(
            "Relaying chat request",
            extra={
                "message_count": len(request.messages),
                "use_web_search": request.web_search,
                "model": upstream_request["model"],
            },
        )
        return self._upstream.complete(upstream_request)

    def parse(self, payload: Any) -> RelayRequestDTO:
        if not isinstance(payload, dict):
            raise InvalidRelayRequestError("Request body must be a JSON object")
        try:
            request = RelayRequestDTO.model_validate(payload)
        except ValidationError as e:
            raise InvalidRelayRequestError(f"Invalid messages array: {e.error_count()} error(s)") from e
        if not request.messages:
            raise InvalidRelayRequestError("Include a messages array in the request body")
        return request

    def build_upstream_request(self, messages: list[dict[str, str]], use_web_search: bool) -> dict[str, Any]:
        body: dict[str, Any] = {
            "model": self._web_search_model if use_web_search else self._default_model,
            "messages": messages,
            "temperature": self._temperature,
            "top_p": self._top_p,
        }
        if use_web_search:
            body["tools"] = [
                {
                    "type": "web_search",
                    "web_search": {"max_results": self._web_search_max_results},
                }
            ]
        return body
