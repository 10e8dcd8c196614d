from __future__ import annotations

from typing import Any

from routine_builder.application.ports.llm import ChatCompletionPort


class MockUpstream(ChatCompletionPort):
    def __init__(self) -> None:
        self.requests: list[dict[str, Any]] = []

    def complete(self, request: dict[str, Any]) -> dict[str, Any]:
        self.requests.append(request)
        last_user = next(
            (m.get("content", "") for m in reversed(request.get("messages", [])) if m.get("role") == "user"),
            "",
        )
        first_line = last_user.strip().splitlines()[0] if last_user.strip() else "your question"
        content = f"Mock advisor reply to: {first_line}"
        if request.get("tools"):
            content += " (web search enabled)"
        return {
            "id": f"mock-{len(self.requests)}",
            "object": "chat.completion",
            "model": request.get("model"),
            "choices": [
                {
                    "index": 0,
                    "message": {"role": "assistant", "content": content},
                    "finish_reason": "stop",
                }
            ],
        }
