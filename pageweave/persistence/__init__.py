"""Snapshot encoding and store persistence."""

from .manager import PersistenceManager
from .snapshot import (
    SnapshotError,
    default_workspace,
    dumps_workspace,
    loads_workspace,
    workspace_from_snapshot,
    workspace_to_snapshot,
)

__all__ = [
    "PersistenceManager",
    "SnapshotError",
    "default_workspace",
    "dumps_workspace",
    "loads_workspace",
    "workspace_from_snapshot",
    "workspace_to_snapshot",
]
