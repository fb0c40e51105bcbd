"""
Actions accepted by the workspace store.

The set is closed: the reducer understands exactly these classes. Actions
that change timestamps carry the timestamp themselves so the reducer stays
a pure function.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from ..models import Block, Page, Workspace, utc_now


@dataclass(frozen=True)
class SetWorkspace:
    """Replace the whole workspace (initial load or reset)."""
    workspace: Workspace


@dataclass(frozen=True)
class SetCurrentPage:
    """Open a page for editing; None closes the current page."""
    page_id: Optional[str]


@dataclass(frozen=True)
class AddPage:
    """Add a page, optionally nested under parent_id."""
    page: Page
    parent_id: Optional[str] = None


@dataclass(frozen=True)
class UpdatePage:
    """Patch page fields. Only title, icon and archived are editable."""
    page_id: str
    updates: Dict[str, Any]
    updated_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class DeletePage:
    """Delete a page and everything nested under it."""
    page_id: str


@dataclass(frozen=True)
class UpdateBlocks:
    """Replace a page's block collection with one produced by the engine."""
    page_id: str
    blocks: List[Block]
    updated_at: datetime = field(default_factory=utc_now)


@dataclass(frozen=True)
class ToggleSidebar:
    pass


@dataclass(frozen=True)
class SetLoading:
    is_loading: bool


Action = Union[
    SetWorkspace,
    SetCurrentPage,
    AddPage,
    UpdatePage,
    DeletePage,
    UpdateBlocks,
    ToggleSidebar,
    SetLoading,
]
