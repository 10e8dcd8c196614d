"""
Tests for the pure session transitions.
"""

from __future__ import annotations

import random
from collections import Counter

from routine_builder.application.use_cases import transitions
from routine_builder.application.utils.prompts import (
    STATUS_EMPTY_SELECTION,
    STATUS_NO_ACTIVE_ROUTINE,
    STATUS_RELAY_FAILED,
    STATUS_ROUTINE_READY,
)
from routine_builder.domain.entities.action_result import ErrorKind
from routine_builder.domain.entities.chat_message import ChatMessage, Role
from routine_builder.domain.entities.effects import CallRelay, PersistSelection, RenderView
from routine_builder.domain.entities.session_state import SessionState

from conftest import make_products


CATALOG_IDS = {p.id for p in make_products()}


def test_toggle_parity_over_random_sequences():
    rng = random.Random(7)
    for _ in range(50):
        state = SessionState.initial("X")
        toggles = [rng.choice(sorted(CATALOG_IDS)) for _ in range(rng.randint(0, 30))]
        for product_id in toggles:
            state = transitions.toggle_selection(state, CATALOG_IDS, product_id).state

        counts = Counter(toggles)
        expected = {pid for pid, n in counts.items() if n % 2 == 1}
        assert set(state.selection) == expected
        assert len(state.selection) == len(set(state.selection))


def test_toggle_appends_in_insertion_order_and_emits_persist_then_render():
    state = SessionState.initial("X")
    state = transitions.toggle_selection(state, CATALOG_IDS, 3).state
    t = transitions.toggle_selection(state, CATALOG_IDS, 1)

    assert t.state.selection == (3, 1)
    assert t.effects == (PersistSelection(product_ids=(3, 1)), RenderView())


def test_toggle_unknown_product_is_rejected_without_persisting():
    state = SessionState.initial("X")
    t = transitions.toggle_selection(state, CATALOG_IDS, 999)

    assert t.result.ok is False
    assert t.result.error is ErrorKind.unknown_product
    assert t.state.selection == ()
    assert not any(isinstance(e, PersistSelection) for e in t.effects)


def test_clear_selection_empties_and_persists():
    state = SessionState(selection=(1, 2, 3), transcript=(ChatMessage(Role.system, "X"),))
    t = transitions.clear_selection(state)

    assert t.state.selection == ()
    assert PersistSelection(product_ids=()) in t.effects


def test_begin_routine_with_empty_selection_makes_no_relay_call():
    state = SessionState.initial("X")
    t = transitions.begin_routine(state, [])

    assert t.result.error is ErrorKind.empty_selection
    assert t.state.status == STATUS_EMPTY_SELECTION
    assert not any(isinstance(e, CallRelay) for e in t.effects)


def test_begin_routine_resets_transcript_and_keeps_persona():
    products = make_products()
    state = SessionState(
        selection=(3,),
        transcript=(
            ChatMessage(Role.system, "X"),
            ChatMessage(Role.user, "old question"),
            ChatMessage(Role.assistant, "old answer"),
        ),
        routine_active=True,
        use_web_search=True,
    )
    t = transitions.begin_routine(state, [products[2]])

    assert t.state.routine_active is False
    assert len(t.state.transcript) == 2
    assert t.state.transcript[0] == ChatMessage(Role.system, "X")
    assert t.state.transcript[1].role is Role.user
    assert "L'Oréal Paris Revitalift Serum (Skincare): Hyaluronic acid serum." in t.state.transcript[1].content

    call = next(e for e in t.effects if isinstance(e, CallRelay))
    assert call.transcript == t.state.transcript
    assert call.use_web_search is True


def test_routine_prompt_follows_selection_order():
    products = make_products()
    t = transitions.begin_routine(SessionState.initial("X"), [products[4], products[0]])
    prompt = t.state.transcript[1].content

    assert prompt.index("Maybelline Sky High Mascara") < prompt.index("CeraVe Hydrating Cleanser")


def test_complete_routine_sets_flag_and_appends_assistant():
    started = transitions.begin_routine(SessionState.initial("X"), make_products()[:1]).state
    t = transitions.complete_routine(started, "Step 1: cleanse.")

    assert t.state.routine_active is True
    assert t.state.transcript[-1] == ChatMessage(Role.assistant, "Step 1: cleanse.")
    assert t.state.status == STATUS_ROUTINE_READY


def test_follow_up_requires_active_routine():
    t = transitions.begin_follow_up(SessionState.initial("X"), "Can I use it at night?")

    assert t.result.error is ErrorKind.no_active_routine
    assert t.state.status == STATUS_NO_ACTIVE_ROUTINE
    assert not any(isinstance(e, CallRelay) for e in t.effects)


def test_blank_follow_up_is_a_noop():
    state = SessionState(transcript=(ChatMessage(Role.system, "X"),), routine_active=True)
    t = transitions.begin_follow_up(state, "   ")

    assert t.result.ok is True
    assert t.state is state
    assert t.effects == ()


def test_fail_relay_keeps_pending_user_message():
    started = transitions.begin_routine(SessionState.initial("X"), make_products()[:2]).state
    t = transitions.fail_relay(started, ErrorKind.transport_error)

    assert t.result.ok is False
    assert t.result.status == STATUS_RELAY_FAILED
    assert t.state.transcript == started.transcript
    assert t.state.routine_active is False
