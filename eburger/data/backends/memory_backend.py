from __future__ import annotations

from typing import Dict, Optional

from ..interface import Persistence


class MemoryPersistence(Persistence):
    """Dict-backed implementation. State lives only as long as the instance."""

    def __init__(self, blobs: Optional[Dict[str, str]] = None) -> None:
        self.blobs: Dict[str, str] = dict(blobs or {})

    def load(self, key: str) -> Optional[str]:
        return self.blobs.get(key)

    def save(self, key: str, blob: str) -> None:
        self.blobs[key] = blob
