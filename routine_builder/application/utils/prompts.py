from __future__ import annotations

from collections.abc import Sequence

from routine_builder.application.utils.catalog_filter import format_category
from routine_builder.domain.entities.product import Product


WELCOME_MESSAGE = (
    "Hello! Select a few L'Oréal favorites, then tap Generate Routine to see a personalized plan."
)

STATUS_CATALOG_UNAVAILABLE = "We could not load products right now. Please refresh to try again."
STATUS_UNKNOWN_PRODUCT = "That product is not in the catalog."
STATUS_EMPTY_SELECTION = "Select at least one product to build your routine."
STATUS_GENERATING = "Generating your routine…"
STATUS_ROUTINE_READY = "Routine ready! Ask any follow-up questions."
STATUS_NO_ACTIVE_ROUTINE = "Generate a routine first so I know which products you're using."
STATUS_THINKING = "Thinking…"
STATUS_RELAY_FAILED = "We hit a snag talking to the AI. Try again in a moment."


def build_routine_prompt(products: Sequence[Product]) -> str:
    product_lines = "\n".join(
        f"- {p.brand} {p.name} ({format_category(p.category)}): {p.description}" for p in products
    )
    return (
        "Create a step-by-step beauty routine using only these L'Oréal group products. "
        "Include when to use each item, quick tips, and any warnings.\n"
        f"{product_lines}"
    )


def build_selection_summary(products: Sequence[Product]) -> str:
    """Short version of the routine request shown in the chat instead of the full prompt."""
    summary = "\n".join(f"• {p.brand} {p.name}" for p in products)
    return f"Here are the products I want to use:\n{summary}\nPlease create a beauty routine."
