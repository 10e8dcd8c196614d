"""Pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import pytest

from routine_builder.application.exceptions import CatalogUnavailableError
from routine_builder.application.ports.catalog import CatalogProviderPort
from routine_builder.application.ports.chat_relay import ChatRelayPort
from routine_builder.application.ports.renderer import SessionRendererPort
from routine_builder.application.use_cases.routine_session import RoutineSession
from routine_builder.domain.entities.chat_message import ChatMessage
from routine_builder.domain.entities.product import Product
from routine_builder.domain.entities.view import SessionView
from routine_builder.infrastructure.store.memory_store import MemoryKeyValueStore


STORAGE_KEY = "test-selected-products"
PERSONA = "X"


def make_products() -> list[Product]:
    return [
        Product(1, "CeraVe", "Hydrating Cleanser", "cleanser", "Gentle ceramide cleanser.", "https://img/1.jpg"),
        Product(2, "La Roche-Posay", "Effaclar Gel", "cleanser", "Foaming gel for oily skin.", "https://img/2.jpg"),
        Product(3, "L'Oréal Paris", "Revitalift Serum", "skincare", "Hyaluronic acid serum.", "https://img/3.jpg"),
        Product(4, "Garnier", "Honey Treasures Shampoo", "hair care", "Repairing shampoo.", "https://img/4.jpg"),
        Product(5, "Maybelline", "Sky High Mascara", "makeup", "Lengthening mascara.", "https://img/5.jpg"),
    ]


def completion(content: str | None) -> dict[str, Any]:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


class FakeCatalog(CatalogProviderPort):
    def __init__(self, products: list[Product] | None = None, fail: bool = False) -> None:
        self._products = products if products is not None else make_products()
        self._fail = fail

    async def load_products(self) -> list[Product]:
        if self._fail:
            raise CatalogUnavailableError("products.json failed to load")
        return list(self._products)


class FakeRelay(ChatRelayPort):
    """Returns queued bodies (or raises queued exceptions) and records every call."""

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes)
        self.calls: list[tuple[tuple[ChatMessage, ...], bool]] = []

    async def relay(self, transcript: Sequence[ChatMessage], use_web_search: bool) -> dict[str, Any]:
        self.calls.append((tuple(transcript), use_web_search))
        outcome = self.outcomes.pop(0) if self.outcomes else completion("Default reply")
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingRenderer(SessionRendererPort):
    def __init__(self) -> None:
        self.views: list[SessionView] = []

    def render(self, view: SessionView) -> None:
        self.views.append(view)


@pytest.fixture
def products() -> list[Product]:
    return make_products()


@pytest.fixture
def store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def relay() -> FakeRelay:
    return FakeRelay()


@pytest.fixture
def renderer() -> RecordingRenderer:
    return RecordingRenderer()


@pytest.fixture
def session(store: MemoryKeyValueStore, relay: FakeRelay, renderer: RecordingRenderer) -> RoutineSession:
    return RoutineSession(
        catalog=FakeCatalog(),
        store=store,
        relay=relay,
        renderer=renderer,
        persona=PERSONA,
        storage_key=STORAGE_KEY,
    )


@pytest.fixture
async def loaded_session(session: RoutineSession) -> RoutineSession:
    result = await session.load_catalog()
    assert result.ok
    return session
