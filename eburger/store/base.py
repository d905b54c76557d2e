from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

from pydantic import TypeAdapter

from ..data.interface import Persistence
from ..data.schema import decode, encode
from ..logging import get_logger

T = TypeVar("T")


class PersistedStore(Generic[T]):
    """
    Holds one value that mirrors a single persistence key.

    Mutations go through `_mutate`, which holds the store lock, reloads the
    saved value, applies the change, saves the result and only then swaps it
    in. Two writers sharing the same storage therefore never overwrite each
    other's snapshot. A failed change or save raises and leaves the held value
    as it was.
    """

    def __init__(
        self,
        persistence: Persistence,
        key: str,
        adapter: TypeAdapter,
        default: Callable[[], T],
    ) -> None:
        self._persistence = persistence
        self._adapter = adapter
        self._default = default
        self._lock = threading.RLock()
        self.key = key
        self.logger = get_logger(type(self).__module__)
        self._value: T = self._load()

    def _load(self) -> T:
        blob = self._persistence.load(self.key)
        if blob is None:
            self.logger.debug(f"No saved state under {self.key}; using defaults")
            return self._default()
        return decode(blob, self._adapter)

    def refresh(self) -> None:
        """Pick up changes other writers saved under this key."""
        with self._lock:
            self._value = self._load()

    def _mutate(self, change: Callable[[T], T]) -> T:
        with self._lock:
            value = change(self._load())
            self._persistence.save(self.key, encode(value, self._adapter))
            self._value = value
            return value
