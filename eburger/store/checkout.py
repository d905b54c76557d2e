from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable
from uuid import uuid4

from ..data.models import Order, PaymentMethod
from ..errors import ValidationError
from ..logging import get_logger
from .cart import CartEngine
from .ledger import OrderLedger


class CheckoutWorkflow:
    """Turns the current cart into a PENDING order on the ledger."""

    def __init__(
        self,
        cart: CartEngine,
        ledger: OrderLedger,
        id_factory: Callable[[], str] = lambda: uuid4().hex,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.cart = cart
        self.ledger = ledger
        self._id_factory = id_factory
        self._clock = clock
        self.logger = get_logger(__name__)

    def checkout(self, customer_name: str, table_no: str, payment_method: PaymentMethod) -> Order:
        """Validate input, freeze the cart into an order, record it, then clear the cart.

        Raises:
            ValidationError: name or table is blank, the cart is empty, or the
                payment method is not CASH or QR.
            PersistenceError: the ledger could not be saved; the cart is kept.
        """
        customer_name = (customer_name or "").strip()
        table_no = (table_no or "").strip()
        if not customer_name:
            raise ValidationError("missing name")
        if not table_no:
            raise ValidationError("missing table")
        if self.cart.is_empty():
            raise ValidationError("empty cart")
        try:
            payment_method = PaymentMethod(payment_method)
        except ValueError as e:
            raise ValidationError(f"unknown payment method: {payment_method!r}") from e

        order = Order.place(
            self.cart.lines(),
            customer_name=customer_name,
            table_no=table_no,
            payment_method=payment_method,
            order_id=self._id_factory(),
            now=self._clock(),
        )
        self.ledger.prepend(order)
        self.cart.clear()
        self.logger.debug(f"Checkout complete for order {order.id}; cart cleared")
        return order
