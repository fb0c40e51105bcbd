"""Workspace state store, its actions and reducer."""

from .actions import (
    Action,
    AddPage,
    DeletePage,
    SetCurrentPage,
    SetLoading,
    SetWorkspace,
    ToggleSidebar,
    UpdateBlocks,
    UpdatePage,
)
from .reducer import WorkspaceState, workspace_reducer
from .store import WorkspaceStore

__all__ = [
    "Action",
    "AddPage",
    "DeletePage",
    "SetCurrentPage",
    "SetLoading",
    "SetWorkspace",
    "ToggleSidebar",
    "UpdateBlocks",
    "UpdatePage",
    "WorkspaceState",
    "workspace_reducer",
    "WorkspaceStore",
]
