from __future__ import annotations

import json
import logging
from collections.abc import Container, Iterable


logger = logging.getLogger(__name__)


def encode_selection(product_ids: Iterable[int]) -> str:
    return json.dumps(list(product_ids))


def decode_selection(raw: str | None, known_ids: Container[int] | None = None) -> tuple[int, ...]:
    """
    Parse a stored selection.

    Absent or malformed values read as an empty selection. Non-integer members,
    duplicates and (when `known_ids` is given) ids outside the catalog are dropped;
    order is preserved.
    """
    if not raw:
        return ()
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError as e:
        logger.warning("Could not parse saved selections", extra={"reason": str(e)})
        return ()
    if not isinstance(parsed, list):
        return ()

    out: list[int] = []
    for item in parsed:
        if isinstance(item, bool) or not isinstance(item, int):
            continue
        if item in out:
            continue
        if known_ids is not None and item not in known_ids:
            continue
        out.append(item)
    return tuple(out)
