from __future__ import annotations

from decimal import Decimal

from pydantic import Field

from .products import Product


class CartLine(Product):
    """A value copy of a Product plus the selected quantity."""
    quantity: int = Field(ge=1, description="Units selected, never zero once stored")

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> "CartLine":
        return cls(**product.model_dump(), quantity=quantity)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity
