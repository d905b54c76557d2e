from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..data.interface import Persistence
from ..data.util import get_persistence
from .cart import CartEngine
from .catalog import CatalogStore
from .checkout import CheckoutWorkflow
from .ledger import OrderLedger
from .settings import SettingsStore


@dataclass
class Storefront:
    """
    Owns one instance of each store plus the session cart.

    The stores can be shared by several sessions in one process (see
    `session`); each session keeps its own cart.
    """

    catalog: CatalogStore
    settings: SettingsStore
    ledger: OrderLedger
    cart: CartEngine = field(default_factory=CartEngine)
    checkout: CheckoutWorkflow = field(init=False)

    def __post_init__(self) -> None:
        self.checkout = CheckoutWorkflow(self.cart, self.ledger)

    @classmethod
    def open(cls, persistence: Optional[Persistence] = None) -> "Storefront":
        """Load every store from `persistence` (or the configured backend)."""
        persistence = persistence or get_persistence()
        return cls(
            catalog=CatalogStore(persistence),
            settings=SettingsStore(persistence),
            ledger=OrderLedger(persistence),
        )

    def session(self, cart: Optional[CartEngine] = None) -> "Storefront":
        """A storefront that shares these stores but keeps its own cart."""
        return Storefront(
            catalog=self.catalog,
            settings=self.settings,
            ledger=self.ledger,
            cart=cart if cart is not None else CartEngine(),
        )

    def refresh(self) -> None:
        """Reload every store so changes saved by other sessions show up."""
        self.catalog.refresh()
        self.settings.refresh()
        self.ledger.refresh()
