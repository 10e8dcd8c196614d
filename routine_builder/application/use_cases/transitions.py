"""
Pure state transitions for the routine session.

Every user action maps to a function `(state, input) -> Transition`. Functions here
never touch storage, the network, or the renderer; they only describe what should
happen through `Transition.effects`, which the session applies in order.
"""

from __future__ import annotations

from collections.abc import Container, Sequence
from dataclasses import dataclass, replace

from routine_builder.application.utils.prompts import (
    STATUS_EMPTY_SELECTION,
    STATUS_GENERATING,
    STATUS_NO_ACTIVE_ROUTINE,
    STATUS_RELAY_FAILED,
    STATUS_ROUTINE_READY,
    STATUS_THINKING,
    STATUS_UNKNOWN_PRODUCT,
    WELCOME_MESSAGE,
    build_routine_prompt,
    build_selection_summary,
)
from routine_builder.domain.entities.action_result import ActionResult, ErrorKind
from routine_builder.domain.entities.chat_message import ChatBubble, ChatMessage, Role
from routine_builder.domain.entities.effects import CallRelay, Effect, PersistSelection, RenderView
from routine_builder.domain.entities.product import Product
from routine_builder.domain.entities.session_state import SessionState


@dataclass(frozen=True)
class Transition:
    state: SessionState
    result: ActionResult
    effects: tuple[Effect, ...] = ()


def _welcome() -> ChatBubble:
    return ChatBubble(speaker="ai", text=WELCOME_MESSAGE)


def _selection_changed(state: SessionState, selection: tuple[int, ...]) -> Transition:
    new_state = replace(state, selection=selection)
    return Transition(
        state=new_state,
        result=ActionResult.success(),
        effects=(PersistSelection(product_ids=selection), RenderView()),
    )


def _rejected(state: SessionState, error: ErrorKind, status: str) -> Transition:
    return Transition(
        state=replace(state, status=status),
        result=ActionResult.failure(error, status),
        effects=(RenderView(),),
    )


def restore_selection(state: SessionState, selection: tuple[int, ...]) -> Transition:
    new_state = replace(state, selection=selection, chat_log=(_welcome(),), status="")
    return Transition(state=new_state, result=ActionResult.success(), effects=(RenderView(),))


def toggle_selection(state: SessionState, catalog_ids: Container[int], product_id: int) -> Transition:
    if product_id not in catalog_ids:
        return _rejected(state, ErrorKind.unknown_product, STATUS_UNKNOWN_PRODUCT)

    if product_id in state.selection:
        selection = tuple(i for i in state.selection if i != product_id)
    else:
        selection = state.selection + (product_id,)
    return _selection_changed(state, selection)


def remove_selection(state: SessionState, product_id: int) -> Transition:
    return _selection_changed(state, tuple(i for i in state.selection if i != product_id))


def clear_selection(state: SessionState) -> Transition:
    return _selection_changed(state, ())


def set_web_search(state: SessionState, enabled: bool) -> Transition:
    return Transition(state=replace(state, use_web_search=bool(enabled)), result=ActionResult.success())


def begin_routine(state: SessionState, selected_products: Sequence[Product]) -> Transition:
    if not selected_products:
        return _rejected(state, ErrorKind.empty_selection, STATUS_EMPTY_SELECTION)

    request = ChatMessage(role=Role.user, content=build_routine_prompt(selected_products))
    # The persona message is kept as-is across resets.
    new_state = replace(
        state,
        transcript=(state.system_message, request),
        routine_active=False,
        chat_log=(_welcome(), ChatBubble(speaker="user", text=build_selection_summary(selected_products))),
        status=STATUS_GENERATING,
    )
    return Transition(
        state=new_state,
        result=ActionResult.success(STATUS_GENERATING),
        effects=(
            RenderView(),
            CallRelay(transcript=new_state.transcript, use_web_search=state.use_web_search, purpose="routine"),
        ),
    )


def complete_routine(state: SessionState, reply: str) -> Transition:
    new_state = replace(
        state.with_transcript(ChatMessage(role=Role.assistant, content=reply)).with_bubbles(
            ChatBubble(speaker="ai", text=reply)
        ),
        routine_active=True,
        status=STATUS_ROUTINE_READY,
    )
    return Transition(state=new_state, result=ActionResult.success(STATUS_ROUTINE_READY), effects=(RenderView(),))


def begin_follow_up(state: SessionState, message: str) -> Transition:
    if not state.routine_active:
        return _rejected(state, ErrorKind.no_active_routine, STATUS_NO_ACTIVE_ROUTINE)

    text = (message or "").strip()
    if not text:
        return Transition(state=state, result=ActionResult.success())

    new_state = replace(
        state.with_transcript(ChatMessage(role=Role.user, content=text)).with_bubbles(
            ChatBubble(speaker="user", text=text)
        ),
        status=STATUS_THINKING,
    )
    return Transition(
        state=new_state,
        result=ActionResult.success(STATUS_THINKING),
        effects=(
            RenderView(),
            CallRelay(transcript=new_state.transcript, use_web_search=state.use_web_search, purpose="follow_up"),
        ),
    )


def complete_follow_up(state: SessionState, reply: str) -> Transition:
    new_state = replace(
        state.with_transcript(ChatMessage(role=Role.assistant, content=reply)).with_bubbles(
            ChatBubble(speaker="ai", text=reply)
        ),
        status="",
    )
    return Transition(state=new_state, result=ActionResult.success(), effects=(RenderView(),))


def fail_relay(state: SessionState, error: ErrorKind) -> Transition:
    """Relay call failed; the pending user message stays in the transcript."""
    return _rejected(state, error, STATUS_RELAY_FAILED)
