from __future__ import annotations

from typing import Any

from routine_builder.application.exceptions import EmptyReplyError


def extract_reply_text(body: Any) -> str:
    """Pull `choices[0].message.content` out of a chat-completion body."""
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError) as e:
        raise EmptyReplyError("No content returned from the AI") from e
    if not isinstance(content, str) or not content.strip():
        raise EmptyReplyError("No content returned from the AI")
    return content.strip()
