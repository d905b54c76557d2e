from __future__ import annotations

from decimal import Decimal
from typing import List, Optional

from ..data.models import CartLine, Product


class CartEngine:
    """
    The customer's in-progress selection.

    Lines are value copies taken when a product is first added, so later
    catalog edits never reach an existing line. Nothing here is persisted.
    """

    def __init__(self) -> None:
        self._lines: List[CartLine] = []

    def _index(self, product_id: str) -> Optional[int]:
        return next((i for i, line in enumerate(self._lines) if line.id == product_id), None)

    def lines(self) -> List[CartLine]:
        return list(self._lines)

    def is_empty(self) -> bool:
        return not self._lines

    def add_item(self, product: Product) -> CartLine:
        idx = self._index(product.id)
        if idx is None:
            line = CartLine.from_product(product)
            self._lines.append(line)
        else:
            line = self._lines[idx].model_copy(update={"quantity": self._lines[idx].quantity + 1})
            self._lines[idx] = line
        return line

    def update_quantity(self, product_id: str, delta: int) -> Optional[CartLine]:
        """Shift a line's quantity by `delta`; a result of zero drops the line."""
        idx = self._index(product_id)
        if idx is None:
            return None
        quantity = max(0, self._lines[idx].quantity + delta)
        if quantity == 0:
            del self._lines[idx]
            return None
        line = self._lines[idx].model_copy(update={"quantity": quantity})
        self._lines[idx] = line
        return line

    def remove_item(self, product_id: str) -> None:
        self._lines = [line for line in self._lines if line.id != product_id]

    def total(self) -> Decimal:
        return sum((line.line_total for line in self._lines), Decimal("0"))

    def count(self) -> int:
        return sum(line.quantity for line in self._lines)

    def clear(self) -> None:
        self._lines = []
