from __future__ import annotations

from dataclasses import dataclass

from routine_builder.domain.entities.chat_message import ChatBubble
from routine_builder.domain.entities.product import Product


@dataclass(frozen=True)
class ProductCard:
    product: Product
    selected: bool


@dataclass(frozen=True)
class CategoryOption:
    value: str
    label: str


@dataclass(frozen=True)
class SessionView:
    selected: tuple[Product, ...]
    chat: tuple[ChatBubble, ...]
    status: str
    routine_active: bool
    use_web_search: bool
