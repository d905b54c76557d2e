from __future__ import annotations

from typing import Literal, Optional

from ..config import get_config
from .backends.json_backend import JsonFilePersistence
from .backends.memory_backend import MemoryPersistence
from .interface import Persistence


def get_persistence(kind: Optional[Literal["json", "memory"]] = None) -> Persistence:
    config = get_config()
    kind = kind or config.persistence_backend
    if kind == "json":
        # Reads from the configured data folder
        return JsonFilePersistence(data_dir=config.data_dir)
    if kind == "memory":
        return MemoryPersistence()
    raise ValueError(f"Unknown persistence kind: {kind}")
