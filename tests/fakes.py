# tests/fakes.py

from __future__ import annotations

import copy
from typing import Any


class InMemoryStore:
    """
    Dict-backed SnapshotStore.

    Records every save() so tests can assert what was (not) written.
    """

    def __init__(self, initial: dict[str, list[dict[str, Any]]] | None = None) -> None:
        self.data: dict[str, list[dict[str, Any]]] = copy.deepcopy(initial or {})
        self.saves: list[str] = []

    def load(self, key: str) -> list[dict[str, Any]]:
        return copy.deepcopy(self.data.get(key, []))

    def save(self, key: str, items: list[dict[str, Any]]) -> None:
        self.saves.append(key)
        self.data[key] = copy.deepcopy(list(items))
