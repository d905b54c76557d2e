from .cart import CartEngine
from .catalog import CatalogStore
from .checkout import CheckoutWorkflow
from .ledger import OrderLedger
from .settings import SettingsStore
from .storefront import Storefront

__all__ = [
    "CartEngine",
    "CatalogStore",
    "CheckoutWorkflow",
    "OrderLedger",
    "SettingsStore",
    "Storefront",
]
