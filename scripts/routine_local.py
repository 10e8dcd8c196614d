#!/usr/bin/env python3
"""
Interactive local routine harness (no browser).

Usage:
  python3 scripts/routine_local.py

What it does:
- Loads the catalog from CATALOG_SOURCE and restores the saved selection
- Lets you filter, toggle and clear products, then generate a routine
- Sends follow-up questions through the same RoutineSession the UI would use
- Relays in-process (mock upstream without OPENAI_API_KEY) unless RELAY_URL is set
"""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from routine_builder.application.use_cases.routine_session import RoutineSession
from routine_builder.core.config import settings
from routine_builder.core.log_format import configure_logging
from routine_builder.infrastructure.render.console_renderer import ConsoleRenderer
from routine_builder.wiring.dependencies import get_routine_session


HELP = """Commands:
  /list [category] [search...]  -> show products (category may be '-' for any)
  /categories                   -> show categories
  /toggle <id>                  -> select or unselect a product
  /remove <id>                  -> remove a product from the selection
  /clear                        -> clear the selection
  /selected                     -> show the selection
  /search on|off                -> toggle web search on relay calls
  /routine                      -> generate a routine from the selection
  /quit                         -> exit
Anything else is sent as a follow-up question."""


def _print_products(session: RoutineSession, args: list[str]) -> None:
    category = args[0] if args and args[0] != "-" else None
    search = " ".join(args[1:]) or None
    cards = session.filter_catalog(category=category, search=search)
    if cards.is_empty():
        print("No products match your search.")
        return
    for card in cards:
        marker = "[x]" if card.selected else "[ ]"
        p = card.product
        print(f"{marker} {p.id:>3}  {p.brand} {p.name} ({p.category})")


def _print_selected(session: RoutineSession) -> None:
    selected = session.selected_products()
    if not selected:
        print("Tap any product to add it to your routine shortlist.")
        return
    for p in selected:
        print(f"- {p.id:>3}  {p.name} ({p.brand})")


def _parse_id(args: list[str]) -> int | None:
    try:
        return int(args[0])
    except (IndexError, ValueError):
        print("Expected a numeric product id.")
        return None


async def main() -> None:
    configure_logging(settings.LOG_LEVEL)
    session = get_routine_session(renderer=ConsoleRenderer())

    result = await session.load_catalog()
    if not result.ok:
        return

    print("\nLocal Routine Harness")
    print("-" * 60)
    print(HELP)
    print("-" * 60)

    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            return

        if not line:
            continue

        cmd, *args = line.split()
        cmd = cmd.lower()
        if cmd in ("/quit", "/exit"):
            print("Bye!")
            return
        if cmd == "/help":
            print(HELP)
        elif cmd == "/list":
            _print_products(session, args)
        elif cmd == "/categories":
            for option in session.categories():
                print(f"{option.value:<15} {option.label}")
        elif cmd in ("/toggle", "/remove"):
            product_id = _parse_id(args)
            if product_id is None:
                continue
            if cmd == "/toggle":
                session.toggle_selection(product_id)
            else:
                session.remove_selection(product_id)
            _print_selected(session)
        elif cmd == "/clear":
            session.clear_selection()
            _print_selected(session)
        elif cmd == "/selected":
            _print_selected(session)
        elif cmd == "/search":
            session.set_web_search(bool(args) and args[0].lower() == "on")
            print(f"web search: {session.state.use_web_search}")
        elif cmd == "/routine":
            await session.generate_routine()
        else:
            await session.send_follow_up(line)


if __name__ == "__main__":
    asyncio.run(main())
