# src/academic_planner/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The planner API depends on this Protocol instead of a concrete store,
so the JSON file store can be swapped for an in-memory fake in tests.
"""

from typing import Any, Protocol

Record = dict[str, Any]
# Plain JSON-compatible record, see storage/codec.py for the field names.

SUBJECTS_KEY = "subjects"
TASKS_KEY = "tasks"


class SnapshotStore(Protocol):
    """
    Key-value persistence of whole collections.

    - load() of a key that was never saved returns []
    - save() replaces the previous value for that key entirely
    """

    def load(self, key: str) -> list[Record]: ...

    def save(self, key: str, items: list[Record]) -> None: ...
