from __future__ import annotations

from typing import Optional, Protocol


# ---- Storage keys ----

PRODUCTS_KEY = "eburger_products"
ORDERS_KEY = "eburger_orders"
SETTINGS_KEY = "eburger_settings"


# ---- Persistence protocol ----

class Persistence(Protocol):
    """
    Backend-agnostic key-value contract over whole-document blobs.

    - `load` returns None when nothing was ever saved under the key.
    - `save` replaces the whole blob and raises PersistenceError on failure.
      There are no partial updates.
    """

    def load(self, key: str) -> Optional[str]:
        """Return the blob saved under `key`, or None."""
        ...

    def save(self, key: str, blob: str) -> None:
        """Replace the blob saved under `key`."""
        ...
