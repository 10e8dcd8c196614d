from __future__ import annotations

from pydantic import BaseModel, model_validator

from routine_builder.domain.entities.product import Product


class ProductDTO(BaseModel):
    id: int
    brand: str
    name: str
    category: str
    description: str = ""
    image: str = ""

    def to_entity(self) -> Product:
        return Product(
            id=self.id,
            brand=self.brand.strip(),
            name=self.name.strip(),
            category=self.category.strip(),
            description=self.description.strip(),
            image=self.image.strip(),
        )


class CatalogPayloadDTO(BaseModel):
    products: list[ProductDTO]

    @model_validator(mode="after")
    def _unique_ids(self) -> "CatalogPayloadDTO":
        seen: set[int] = set()
        for product in self.products:
            if product.id in seen:
                raise ValueError(f"duplicate product id {product.id}")
            seen.add(product.id)
        return self

    def extract_products(self) -> list[Product]:
        return [p.to_entity() for p in self.products]
