from __future__ import annotations

from abc import ABC, abstractmethod

from routine_builder.domain.entities.product import Product


class CatalogProviderPort(ABC):
    @abstractmethod
    async def load_products(self) -> list[Product]:
        """
        Fetch the full product list once.

        Raises:
            CatalogUnavailableError: network failure or a payload that is not
                `{"products": [...]}` with well-formed, uniquely identified products
        """
        raise NotImplementedError
