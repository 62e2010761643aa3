"""
Query Store Module

Durable single-key storage for the last search string. Values live in a
small JSON object file so other keys written by the same install survive
a write.
"""

import json
import logging
import os
from pathlib import Path
from typing import Dict, Optional

from ..config import config


logger = logging.getLogger(__name__)


class QueryStore:
    """
    Reads and writes the persisted search query under one fixed key.

    The methods are coroutines so the screen can gather and schedule them
    on its event loop, but the file I/O itself runs inline on that loop:
    no worker threads are used. Each call reads or writes one small JSON
    file, so the loop is held only for that single read or write.
    """

    def __init__(self, path: Optional[Path] = None, key: Optional[str] = None):
        """Initialize the store."""
        self.path = Path(path) if path is not None else config.storage.path
        self.key = key or config.storage.search_key
        logger.info(f"QueryStore initialized (path: {self.path}, key: {self.key})")

    async def get(self) -> Optional[str]:
        """
        Read the stored query.

        Returns:
            The stored string, or None if it was never set or the file
            cannot be read.
        """
        value = self._read_all().get(self.key)
        if value is None:
            logger.debug("No stored query")
            return None
        if not isinstance(value, str):
            logger.warning(f"Ignoring non-string value under {self.key}")
            return None

        logger.debug(f"Restored query {value!r}")
        return value

    async def set(self, value: str) -> None:
        """
        Store a query, replacing any previous one.

        Args:
            value: The query text (may be empty).

        Raises:
            OSError: If the file cannot be written.
        """
        data = self._read_all()
        data[self.key] = value
        self._write_all(data)
        logger.debug(f"Stored query {value!r}")

    async def clear(self) -> None:
        """Remove the stored query if present."""
        data = self._read_all()
        if data.pop(self.key, None) is not None:
            self._write_all(data)
            logger.info(f"Cleared stored query from {self.path}")

    def _read_all(self) -> Dict[str, object]:
        if not self.path.exists():
            return {}

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"Error reading storage file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Storage file {self.path} does not hold an object")
            return {}
        return data

    def _write_all(self, data: Dict[str, object]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

        # Replace atomically so a crash never leaves a half-written file.
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data), encoding="utf-8")
        os.replace(tmp_path, self.path)
