# src/academic_planner/storage/json_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


class JsonStore:
    """
    File-backed key-value store of whole collections.

    The file holds one JSON object: {key: [record, ...], ...}.
    Every save rewrites the file through a temp file + os.replace, so a crash
    mid-write leaves the previous version intact.

    A missing or unreadable file behaves like an empty store.
    """

    def __init__(self, path: str | Path = "planner.json") -> None:
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("JsonStore ready path=%s exists=%s", self._path, self._path.exists())

    @property
    def path(self) -> Path:
        return self._path

    def _read_all(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text("utf-8"))
        except Exception:
            logger.exception("Failed to read store file %s", self._path)
            return {}
        if not isinstance(data, dict):
            logger.error("Store file %s does not hold a JSON object; ignoring it.", self._path)
            return {}
        return data

    def load(self, key: str) -> list[dict[str, Any]]:
        items = self._read_all().get(key)
        if items is None:
            return []
        if not isinstance(items, list):
            logger.error("Store key %r is not a list; treating it as empty.", key)
            return []
        return [i for i in items if isinstance(i, dict)]

    def save(self, key: str, items: list[dict[str, Any]]) -> None:
        data = self._read_all()
        data[key] = list(items)

        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        try:
            tmp.write_text(json.dumps(data, ensure_ascii=False, indent=2, allow_nan=False), "utf-8")
            os.replace(tmp, self._path)
        except Exception:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)
        logger.debug("Saved %d %s to %s", len(items), key, self._path)
