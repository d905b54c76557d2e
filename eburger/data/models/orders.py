from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Tuple
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field

from .cart import CartLine


class PaymentMethod(str, Enum):
    CASH = "CASH"
    QR = "QR"


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"

    @property
    def is_terminal(self) -> bool:
        return self is not OrderStatus.PENDING


class Order(BaseModel):
    """A submitted order. Immutable apart from its status."""
    model_config = ConfigDict(frozen=True)

    id: str = Field(description="Unique order identifier")
    customer_name: str = Field(description="Name given at checkout")
    table_no: str = Field(description="Table number given at checkout")
    items: Tuple[CartLine, ...] = Field(description="Frozen copy of the cart lines at submission")
    total_amount: Decimal = Field(description="Sum of price x quantity over items, frozen at submission")
    payment_method: PaymentMethod = Field(description="How the customer intends to pay")
    status: OrderStatus = Field(default=OrderStatus.PENDING, description="Lifecycle state")
    created_at: datetime = Field(description="Creation instant (UTC)")

    @classmethod
    def place(
        cls,
        lines: Iterable[CartLine],
        customer_name: str,
        table_no: str,
        payment_method: PaymentMethod,
        order_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> "Order":
        """Freeze cart lines into a new PENDING order and compute its total once."""
        items = tuple(line.model_copy() for line in lines)
        return cls(
            id=order_id or uuid4().hex,
            customer_name=customer_name,
            table_no=table_no,
            items=items,
            total_amount=sum((line.line_total for line in items), Decimal("0")),
            payment_method=payment_method,
            status=OrderStatus.PENDING,
            created_at=now or datetime.now(timezone.utc),
        )

    @property
    def item_count(self) -> int:
        return sum(line.quantity for line in self.items)

    def with_status(self, status: OrderStatus) -> "Order":
        return self.model_copy(update={"status": status})
