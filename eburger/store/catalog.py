from __future__ import annotations

from typing import Iterable, List, Optional
from uuid import uuid4

from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from ..data.interface import PRODUCTS_KEY, Persistence
from ..data.models import Product, ProductDraft
from ..errors import NotFoundError, ValidationError
from .base import PersistedStore
from .seed_data import default_products

ALL_CATEGORIES = "All"


def _validated(draft: ProductDraft, product_id: str) -> Product:
    try:
        return draft.to_product(product_id)
    except SchemaValidationError as e:
        error = e.errors()[0]
        field = ".".join(str(part) for part in error["loc"])
        raise ValidationError(f"invalid product {field}: {error['msg']}") from e


class CatalogStore(PersistedStore[List[Product]]):
    """Owns the product collection. Every mutation persists the whole list."""

    def __init__(self, persistence: Persistence) -> None:
        super().__init__(persistence, PRODUCTS_KEY, TypeAdapter(List[Product]), default_products)

    # ---------- queries ----------

    def __len__(self) -> int:
        return len(self._value)

    def list(self) -> List[Product]:
        return list(self._value)

    def get(self, product_id: str) -> Optional[Product]:
        return next((p for p in self._value if p.id == product_id), None)

    def categories(self) -> List[str]:
        """Distinct category labels in first-seen order."""
        return list(dict.fromkeys(p.category for p in self._value))

    def by_category(self, category: Optional[str] = None) -> List[Product]:
        if not category or category == ALL_CATEGORIES:
            return self.list()
        return [p for p in self._value if p.category == category]

    # ---------- mutations ----------

    def add(self, product: Product) -> Product:
        def change(products: List[Product]) -> List[Product]:
            if any(p.id == product.id for p in products):
                raise ValidationError(f"duplicate product id: {product.id}")
            return [*products, product]

        self._mutate(change)
        self.logger.info(f"Added product {product.id} ({product.name})")
        return product

    def create(self, draft: ProductDraft) -> Product:
        """Validate a form draft, assign a fresh id and add it."""
        return self.add(_validated(draft, uuid4().hex))

    def revise(self, product_id: str, draft: ProductDraft) -> Product:
        """Validate a form draft and apply it to an existing product."""
        return self.update(_validated(draft, product_id))

    def update(self, product: Product) -> Product:
        def change(products: List[Product]) -> List[Product]:
            if not any(p.id == product.id for p in products):
                raise NotFoundError("product", product.id)
            return [product if p.id == product.id else p for p in products]

        self._mutate(change)
        self.logger.info(f"Updated product {product.id}")
        return product

    def remove(self, product_id: str) -> None:
        def change(products: List[Product]) -> List[Product]:
            if not any(p.id == product_id for p in products):
                raise NotFoundError("product", product_id)
            return [p for p in products if p.id != product_id]

        self._mutate(change)
        self.logger.info(f"Removed product {product_id}")

    def replace_all(self, products: Iterable[Product]) -> None:
        products = list(products)
        ids = [p.id for p in products]
        if len(ids) != len(set(ids)):
            raise ValidationError("duplicate product ids in catalog")
        self._mutate(lambda _: products)
