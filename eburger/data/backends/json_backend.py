from __future__ import annotations

import os
import tempfile
from pathlib import Path
from typing import Optional

from ...config import get_config
from ...errors import PersistenceError
from ...logging import get_logger
from ..interface import Persistence

logger = get_logger(__name__)


class JsonFilePersistence(Persistence):
    """
    File-backed implementation.
    - One `<key>.json` file per key under `data_dir`.
    - Every save writes a temp file next to the target and renames it over the
      target, so a crash mid-write never leaves a truncated blob behind.
    """

    def __init__(self, data_dir: str | Path = None) -> None:
        if data_dir is None:
            config = get_config()
            data_dir = config.data_dir

        self.data_dir = Path(data_dir)

        # If the path is relative, make it relative to the repository root
        if not self.data_dir.is_absolute():
            current = Path.cwd()
            repo_root = None

            # Look up the directory tree for pyproject.toml
            for parent in [current] + list(current.parents):
                if (parent / "pyproject.toml").exists():
                    repo_root = parent
                    break

            self.data_dir = (repo_root or current) / self.data_dir

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise PersistenceError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            logger.error(f"Failed to read {path}: {e}")
            raise PersistenceError(f"Could not read saved state for {key}: {e}") from e

    def save(self, key: str, blob: str) -> None:
        path = self._path(key)
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.data_dir)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(blob)
                os.replace(tmp_name, path)
            except OSError:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise PersistenceError(f"Changes not saved for {key}: {e}") from e
        logger.debug(f"Saved {key} ({len(blob)} bytes) to {path}")
