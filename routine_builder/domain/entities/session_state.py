from __future__ import annotations

from dataclasses import dataclass, replace

from routine_builder.domain.entities.chat_message import ChatBubble, ChatMessage, Role


@dataclass(frozen=True)
class SessionState:
    selection: tuple[int, ...] = ()
    transcript: tuple[ChatMessage, ...] = ()
    routine_active: bool = False
    chat_log: tuple[ChatBubble, ...] = ()
    use_web_search: bool = False
    status: str = ""

    @staticmethod
    def initial(persona: str) -> "SessionState":
        return SessionState(transcript=(ChatMessage(role=Role.system, content=persona),))

    @property
    def system_message(self) -> ChatMessage:
        return self.transcript[0]

    def with_transcript(self, *messages: ChatMessage) -> "SessionState":
        return replace(self, transcript=self.transcript + messages)

    def with_bubbles(self, *bubbles: ChatBubble) -> "SessionState":
        return replace(self, chat_log=self.chat_log + bubbles)
