from __future__ import annotations

import json

import httpx
import pytest

from routine_builder.application.exceptions import (
    EmptyReplyError,
    InvalidRelayRequestError,
    TransportError,
    UpstreamError,
)
from routine_builder.application.use_cases.relay_chat import RelayChatUseCase
from routine_builder.application.utils.reply import extract_reply_text
from routine_builder.domain.entities.chat_message import ChatMessage, Role
from routine_builder.infrastructure.llm.mock_upstream import MockUpstream
from routine_builder.infrastructure.relay.http_relay_client import HttpChatRelayClient
from routine_builder.infrastructure.relay.in_process_relay import InProcessChatRelay

from conftest import completion


TRANSCRIPT = (
    ChatMessage(Role.system, "X"),
    ChatMessage(Role.user, "Create a routine."),
)


def _relay_use_case(upstream: MockUpstream) -> RelayChatUseCase:
    return RelayChatUseCase(upstream=upstream, default_model="gpt-4o", web_search_model="gpt-4o-mini")


async def test_http_relay_client_posts_transcript_and_flag():
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(json.loads(request.content))
        return httpx.Response(200, json=completion("Routine text"))

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    relay = HttpChatRelayClient("http://relay.test/", client=client)

    body = await relay.relay(TRANSCRIPT, use_web_search=True)

    assert extract_reply_text(body) == "Routine text"
    assert seen == [
        {
            "messages": [
                {"role": "system", "content": "X"},
                {"role": "user", "content": "Create a routine."},
            ],
            "webSearch": True,
        }
    ]


async def test_http_relay_client_non_success_status():
    client = httpx.AsyncClient(
        transport=httpx.MockTransport(lambda request: httpx.Response(502, json={"error": "bad gateway"}))
    )

    with pytest.raises(UpstreamError) as exc_info:
        await HttpChatRelayClient("http://relay.test/", client=client).relay(TRANSCRIPT, use_web_search=False)

    assert exc_info.value.status_code == 502


async def test_http_relay_client_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))

    with pytest.raises(TransportError):
        await HttpChatRelayClient("http://relay.test/", client=client).relay(TRANSCRIPT, use_web_search=False)


async def test_http_relay_client_non_json_body():
    client = httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, text="ok")))

    with pytest.raises(TransportError):
        await HttpChatRelayClient("http://relay.test/", client=client).relay(TRANSCRIPT, use_web_search=False)


async def test_in_process_relay_uses_mock_upstream():
    upstream = MockUpstream()
    relay = InProcessChatRelay(_relay_use_case(upstream))

    body = await relay.relay(TRANSCRIPT, use_web_search=True)

    assert extract_reply_text(body) == "Mock advisor reply to: Create a routine. (web search enabled)"
    assert upstream.requests[0]["model"] == "gpt-4o-mini"
    assert upstream.requests[0]["tools"][0]["web_search"]["max_results"] == 3


def test_relay_use_case_rejects_bad_payloads():
    use_case = _relay_use_case(MockUpstream())

    for payload in (None, "text", [], {}, {"messages": []}, {"messages": [{"content": "hi"}]}):
        with pytest.raises(InvalidRelayRequestError):
            use_case.execute(payload)


def test_relay_use_case_coerces_web_search_flag():
    upstream = MockUpstream()
    use_case = _relay_use_case(upstream)

    use_case.execute({"messages": [{"role": "user", "content": "hi"}], "webSearch": 1})
    use_case.execute({"messages": [{"role": "user", "content": "hi"}], "webSearch": None})

    assert "tools" in upstream.requests[0]
    assert "tools" not in upstream.requests[1]


def test_extract_reply_text():
    assert extract_reply_text(completion("  trimmed  ")) == "trimmed"
    for body in (completion(""), completion("   "), completion(None), {"choices": []}, {}, None, []):
        with pytest.raises(EmptyReplyError):
            extract_reply_text(body)
