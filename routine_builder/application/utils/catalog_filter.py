from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator, Sequence
from typing import Generic, TypeVar

from routine_builder.domain.entities.product import Product
from routine_builder.domain.entities.view import CategoryOption

T = TypeVar("T")


def format_category(category: str) -> str:
    """'hair care' -> 'Hair Care'."""
    return " ".join(word[:1].upper() + word[1:] for word in category.split(" "))


def list_categories(products: Iterable[Product]) -> list[CategoryOption]:
    categories = sorted({p.category for p in products})
    return [CategoryOption(value=c, label=format_category(c)) for c in categories]


def matches(product: Product, category: str | None, search: str | None) -> bool:
    category = (category or "").strip()
    term = (search or "").strip().lower()
    if category and product.category != category:
        return False
    if term and term not in product.search_text:
        return False
    return True


def filter_products(products: Iterable[Product], category: str | None = None, search: str | None = None) -> Iterator[Product]:
    return (p for p in products if matches(p, category, search))


class FilteredCatalog(Generic[T]):
    """Lazy view over a filtered catalog; every iteration re-runs the filter."""

    def __init__(
        self,
        products: Sequence[Product],
        category: str | None,
        search: str | None,
        project: Callable[[Product], T],
    ) -> None:
        self._products = products
        self._category = category
        self._search = search
        self._project = project

    def __iter__(self) -> Iterator[T]:
        for product in filter_products(self._products, self._category, self._search):
            yield self._project(product)

    def is_empty(self) -> bool:
        return next(iter(self), None) is None
