from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from routine_builder.application.exceptions import (
    CatalogUnavailableError,
    EmptyReplyError,
    InvalidRelayRequestError,
    TransportError,
    UpstreamError,
)
from routine_builder.application.ports.catalog import CatalogProviderPort
from routine_builder.application.ports.chat_relay import ChatRelayPort
from routine_builder.application.ports.key_value_store import KeyValueStorePort
from routine_builder.application.ports.renderer import SessionRendererPort
from routine_builder.application.use_cases import transitions
from routine_builder.application.use_cases.transitions import Transition
from routine_builder.application.utils.catalog_filter import FilteredCatalog, list_categories
from routine_builder.application.utils.prompts import STATUS_CATALOG_UNAVAILABLE
from routine_builder.application.utils.reply import extract_reply_text
from routine_builder.application.utils.selection_codec import decode_selection, encode_selection
from routine_builder.core.config import DEFAULT_ADVISOR_PERSONA
from routine_builder.domain.entities.action_result import ActionResult, ErrorKind
from routine_builder.domain.entities.effects import CallRelay, PersistSelection, RenderView
from routine_builder.domain.entities.product import Product
from routine_builder.domain.entities.session_state import SessionState
from routine_builder.domain.entities.view import CategoryOption, ProductCard, SessionView


_RELAY_ERRORS: dict[type[Exception], ErrorKind] = {
    UpstreamError: ErrorKind.upstream_error,
    TransportError: ErrorKind.transport_error,
    EmptyReplyError: ErrorKind.empty_reply,
    InvalidRelayRequestError: ErrorKind.invalid_request,
}


def _error_kind(error: Exception) -> ErrorKind:
    for error_type, kind in _RELAY_ERRORS.items():
        if isinstance(error, error_type):
            return kind
    return ErrorKind.transport_error


class RoutineSession:
    """
    Owns the catalog, the selection set and the advisor conversation for one user.

    Actions are computed by the pure functions in `transitions`; this class applies
    their effects (persist, render, call the relay). Methods that reach the network
    are coroutines with exactly one suspension point and always return an
    ActionResult instead of raising.
    """

    def __init__(
        self,
        catalog: CatalogProviderPort,
        store: KeyValueStorePort,
        relay: ChatRelayPort,
        renderer: SessionRendererPort | None = None,
        persona: str = DEFAULT_ADVISOR_PERSONA,
        storage_key: str = "loreal-selected-products",
    ) -> None:
        self._catalog = catalog
        self._store = store
        self._relay = relay
        self._renderer = renderer
        self._storage_key = storage_key
        self._products: tuple[Product, ...] = ()
        self._by_id: dict[int, Product] = {}
        self._state = SessionState.initial(persona)
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def products(self) -> tuple[Product, ...]:
        return self._products

    async def load_catalog(self) -> ActionResult:
        try:
            products = await self._catalog.load_products()
        except CatalogUnavailableError as e:
            self._logger.error(
                "Unable to load products",
                extra={"error_kind": ErrorKind.catalog_unavailable.value, "reason": str(e)},
            )
            self._state = replace(self._state, status=STATUS_CATALOG_UNAVAILABLE)
            self._render()
            return ActionResult.failure(ErrorKind.catalog_unavailable, STATUS_CATALOG_UNAVAILABLE)

        self._products = tuple(products)
        self._by_id = {p.id: p for p in self._products}
        restored = decode_selection(self._store.get_item(self._storage_key), known_ids=self._by_id)
        self._logger.info(
            "Catalog loaded (%d products)", len(self._products), extra={"selection_size": len(restored)}
        )
        return self._apply(transitions.restore_selection(self._state, restored))

    def toggle_selection(self, product_id: int) -> ActionResult:
        result = self._apply(transitions.toggle_selection(self._state, self._by_id, product_id))
        if result.error is ErrorKind.unknown_product:
            self._logger.warning("Rejected unknown product", extra={"product_id": product_id})
        return result

    def remove_selection(self, product_id: int) -> ActionResult:
        return self._apply(transitions.remove_selection(self._state, product_id))

    def clear_selection(self) -> ActionResult:
        return self._apply(transitions.clear_selection(self._state))

    def set_web_search(self, enabled: bool) -> ActionResult:
        return self._apply(transitions.set_web_search(self._state, enabled))

    def filter_catalog(self, category: str | None = None, search: str | None = None) -> FilteredCatalog[ProductCard]:
        selected = frozenset(self._state.selection)
        return FilteredCatalog(
            self._products,
            category,
            search,
            lambda p: ProductCard(product=p, selected=p.id in selected),
        )

    def categories(self) -> list[CategoryOption]:
        return list_categories(self._products)

    def selected_products(self) -> list[Product]:
        return [self._by_id[i] for i in self._state.selection if i in self._by_id]

    def view(self) -> SessionView:
        return SessionView(
            selected=tuple(self.selected_products()),
            chat=self._state.chat_log,
            status=self._state.status,
            routine_active=self._state.routine_active,
            use_web_search=self._state.use_web_search,
        )

    async def generate_routine(self) -> ActionResult:
        return await self._run(
            transitions.begin_routine(self._state, self.selected_products()),
            transitions.complete_routine,
        )

    async def send_follow_up(self, message: str) -> ActionResult:
        return await self._run(
            transitions.begin_follow_up(self._state, message),
            transitions.complete_follow_up,
        )

    async def _run(self, transition: Transition, on_reply: Callable[[SessionState, str], Transition]) -> ActionResult:
        result = self._apply(transition)
        call = next((e for e in transition.effects if isinstance(e, CallRelay)), None)
        if call is None:
            return result

        try:
            body = await self._relay.relay(call.transcript, call.use_web_search)
            reply = extract_reply_text(body)
        except (UpstreamError, TransportError, EmptyReplyError, InvalidRelayRequestError) as e:
            kind = _error_kind(e)
            self._logger.error(
                "Chat request failed",
                extra={
                    "error_kind": kind.value,
                    "purpose": call.purpose,
                    "status_code": getattr(e, "status_code", None),
                    "reason": str(e),
                },
            )
            return self._apply(transitions.fail_relay(self._state, kind))
        except Exception:
            self._logger.exception("Chat request failed unexpectedly", extra={"purpose": call.purpose})
            return self._apply(transitions.fail_relay(self._state, ErrorKind.transport_error))

        self._logger.info(
            "Chat reply received",
            extra={
                "purpose": call.purpose,
                "message_count": len(call.transcript) + 1,
                "use_web_search": call.use_web_search,
            },
        )
        return self._apply(on_reply(self._state, reply))

    def _apply(self, transition: Transition) -> ActionResult:
        self._state = transition.state
        for effect in transition.effects:
            if isinstance(effect, PersistSelection):
                self._persist(effect.product_ids)
            elif isinstance(effect, RenderView):
                self._render()
        return transition.result

    def _persist(self, product_ids: tuple[int, ...]) -> None:
        # The in-memory selection stays authoritative when the write fails.
        try:
            self._store.set_item(self._storage_key, encode_selection(product_ids))
        except OSError as e:
            self._logger.error(
                "Unable to persist selection",
                extra={"selection_size": len(product_ids), "reason": str(e)},
            )

    def _render(self) -> None:
        if self._renderer is not None:
            self._renderer.render(self.view())
