from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Product:
    id: int
    brand: str
    name: str
    category: str
    description: str
    image: str

    @property
    def search_text(self) -> str:
        return f"{self.brand} {self.name}".lower()
