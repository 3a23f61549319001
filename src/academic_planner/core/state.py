# src/academic_planner/core/state.py

from __future__ import annotations

from dataclasses import dataclass

from .ports import SnapshotStore


@dataclass
class AppState:
    # Settings are kept on the state so handlers don't re-read global config.
    settings: object
    store: SnapshotStore
