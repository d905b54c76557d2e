from __future__ import annotations

from typing import List, Optional

import pandas as pd
from pydantic import TypeAdapter

from ..data.interface import ORDERS_KEY, Persistence
from ..data.models import Order, OrderStatus
from ..errors import InvalidTransitionError, NotFoundError, ValidationError
from .base import PersistedStore

ORDER_COLUMNS = [
    "created_at", "id", "customer_name", "table_no", "items",
    "item_count", "total_amount", "payment_method", "status",
]


class OrderLedger(PersistedStore[List[Order]]):
    """
    Submitted orders, newest first.

    Orders are only ever added by checkout. The one mutable field is status,
    which moves PENDING -> COMPLETED or PENDING -> CANCELLED and never leaves
    a terminal state.
    """

    def __init__(self, persistence: Persistence) -> None:
        super().__init__(persistence, ORDERS_KEY, TypeAdapter(List[Order]), list)

    # ---------- queries ----------

    def __len__(self) -> int:
        return len(self._value)

    def list(self) -> List[Order]:
        return list(self._value)

    def get(self, order_id: str) -> Optional[Order]:
        return next((o for o in self._value if o.id == order_id), None)

    def pending(self) -> List[Order]:
        return [o for o in self._value if o.status is OrderStatus.PENDING]

    def history(self) -> List[Order]:
        return [o for o in self._value if o.status.is_terminal]

    def to_frame(self) -> pd.DataFrame:
        """Flatten orders into one row each for tabular display."""
        rows = [
            {
                "created_at": o.created_at,
                "id": o.id,
                "customer_name": o.customer_name,
                "table_no": o.table_no,
                "items": ", ".join(f"{line.quantity}x {line.name}" for line in o.items),
                "item_count": o.item_count,
                "total_amount": float(o.total_amount),
                "payment_method": o.payment_method.value,
                "status": o.status.value,
            }
            for o in self._value
        ]
        return pd.DataFrame(rows, columns=ORDER_COLUMNS)

    # ---------- mutations ----------

    def prepend(self, order: Order) -> Order:
        def change(orders: List[Order]) -> List[Order]:
            if any(o.id == order.id for o in orders):
                raise ValidationError(f"order already recorded: {order.id}")
            return [order, *orders]

        self._mutate(change)
        self.logger.info(
            f"Recorded order {order.id} for {order.customer_name} at table {order.table_no} "
            f"({order.item_count} items, {order.total_amount})"
        )
        return order

    def set_status(self, order_id: str, status: OrderStatus) -> Order:
        status = OrderStatus(status)

        def change(orders: List[Order]) -> List[Order]:
            current = next((o for o in orders if o.id == order_id), None)
            if current is None:
                raise NotFoundError("order", order_id)
            if current.status.is_terminal:
                raise InvalidTransitionError(
                    f"order {order_id} is already {current.status.value}; cannot set {status.value}"
                )
            if status is OrderStatus.PENDING:
                raise InvalidTransitionError(f"order {order_id} cannot be set back to PENDING")
            updated = current.with_status(status)
            return [updated if o.id == order_id else o for o in orders]

        self._mutate(change)
        self.logger.info(f"Order {order_id} marked {status.value}")
        return self.get(order_id)

    def complete(self, order_id: str) -> Order:
        return self.set_status(order_id, OrderStatus.COMPLETED)

    def cancel(self, order_id: str) -> Order:
        return self.set_status(order_id, OrderStatus.CANCELLED)
