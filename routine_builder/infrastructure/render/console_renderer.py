from __future__ import annotations

import sys
from typing import TextIO

from routine_builder.application.ports.renderer import SessionRendererPort
from routine_builder.domain.entities.chat_message import ChatBubble
from routine_builder.domain.entities.view import SessionView


class ConsoleRenderer(SessionRendererPort):
    """Prints chat bubbles as they appear, plus the status line when it changes."""

    def __init__(self, out: TextIO | None = None) -> None:
        self._out = out or sys.stdout
        self._shown: tuple[ChatBubble, ...] = ()
        self._last_status = ""

    def render(self, view: SessionView) -> None:
        chat = view.chat
        if chat[: len(self._shown)] != self._shown:
            # Chat was reset (new routine); show it again from the top.
            self._shown = ()
        for bubble in chat[len(self._shown):]:
            speaker = "You" if bubble.speaker == "user" else "L'Oréal Advisor"
            print(f"\n[{speaker}]\n{bubble.text}", file=self._out)
        self._shown = chat

        if view.status and view.status != self._last_status:
            print(f"({view.status})", file=self._out)
        self._last_status = view.status
