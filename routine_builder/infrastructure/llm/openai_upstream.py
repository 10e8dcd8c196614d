from __future__ import annotations

import logging
from typing import Any

import httpx
from openai import APIConnectionError, APIStatusError, OpenAI

from routine_builder.application.exceptions import TransportError, UpstreamError
from routine_builder.application.ports.llm import ChatCompletionPort


class OpenAIUpstream(ChatCompletionPort):
    """
    OpenAI-backed adapter implementing ChatCompletionPort.

    Contract guarantees:
    - complete returns the provider's JSON body untouched
    - SDK retries are disabled, so one request means one upstream call
    - Raises:
        UpstreamError: provider answered with a non-success status, or a body that is not JSON
        TransportError: networking failures (connection refused, DNS, timeouts)
    """

    def __init__(
        self,
        api_key: str,
        base_url: str | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.client = OpenAI(
            api_key=api_key,
            base_url=base_url,
            max_retries=0,
            http_client=http_client,
        )
        self._logger = logging.getLogger(__name__)

    def complete(self, request: dict[str, Any]) -> dict[str, Any]:
        try:
            raw = self.client.chat.completions.with_raw_response.create(**request)
        except APIStatusError as e:
            self._logger.warning(
                "Upstream request failed",
                extra={"status_code": e.status_code, "model": request.get("model")},
            )
            raise UpstreamError(status_code=e.status_code, details=e.response.text) from e
        except APIConnectionError as e:
            self._logger.error("Upstream unreachable", extra={"reason": str(e)})
            raise TransportError(str(e)) from e

        try:
            return raw.http_response.json()
        except ValueError as e:
            snippet = raw.http_response.text[:200].replace("\n", " ")
            raise UpstreamError(status_code=502, details=f"Upstream returned a non-JSON body: {snippet!r}") from e
