from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorKind(str, Enum):
    catalog_unavailable = "CatalogUnavailable"
    unknown_product = "UnknownProduct"
    empty_selection = "EmptySelection"
    no_active_routine = "NoActiveRoutine"
    invalid_request = "InvalidRequest"
    upstream_error = "UpstreamError"
    transport_error = "TransportError"
    empty_reply = "EmptyReply"


@dataclass(frozen=True)
class ActionResult:
    ok: bool
    status: str = ""
    error: ErrorKind | None = None

    @staticmethod
    def success(status: str = "") -> "ActionResult":
        return ActionResult(ok=True, status=status)

    @staticmethod
    def failure(error: ErrorKind, status: str) -> "ActionResult":
        return ActionResult(ok=False, status=status, error=error)
