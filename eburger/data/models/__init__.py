from .products import Product, ProductDraft
from .cart import CartLine
from .orders import Order, OrderStatus, PaymentMethod
from .settings import StoreSettings

__all__ = [
    # Catalog
    "Product",
    "ProductDraft",
    # Cart
    "CartLine",
    # Ledger
    "Order",
    "OrderStatus",
    "PaymentMethod",
    # Settings
    "StoreSettings",
]
