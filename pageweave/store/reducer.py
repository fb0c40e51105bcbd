"""
State transitions for the workspace store.

``workspace_reducer`` is a pure function of (state, action). It returns the
same state object when an action changes nothing, which is how the store
knows not to notify subscribers.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from ..engine import add_page, find_page, remove_page, reorder_all, replace_page
from ..models import Page, Workspace
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


EDITABLE_PAGE_FIELDS = ("title", "icon", "archived")


class WorkspaceState(BaseModel):
    """
    Everything the editor holds in memory.

    ``current_page`` is a copy of one page from ``workspace``; the reducer
    re-reads it after every workspace change so the two never diverge.
    """

    model_config = ConfigDict(frozen=True)

    workspace: Optional[Workspace] = None
    current_page: Optional[Page] = None
    sidebar_collapsed: bool = False
    is_loading: bool = False

    @property
    def current_page_id(self) -> Optional[str]:
        return self.current_page.id if self.current_page else None


def _with_workspace(state: WorkspaceState, workspace: Workspace) -> WorkspaceState:
    if workspace is state.workspace:
        return state
    current = find_page(workspace, state.current_page_id)
    return state.model_copy(update={"workspace": workspace, "current_page": current})


def workspace_reducer(state: WorkspaceState, action: Action) -> WorkspaceState:
    """
    Compute the next state.

    Args:
        state: The current state
        action: One of the store actions

    Returns:
        The next state, or state itself when nothing changed

    Raises:
        pydantic.ValidationError: If UpdatePage carries a wrongly typed value
    """
    if isinstance(action, SetWorkspace):
        return _with_workspace(state, action.workspace)

    if isinstance(action, ToggleSidebar):
        return state.model_copy(update={"sidebar_collapsed": not state.sidebar_collapsed})

    if isinstance(action, SetLoading):
        if state.is_loading == action.is_loading:
            return state
        return state.model_copy(update={"is_loading": action.is_loading})

    # Everything below needs a workspace
    workspace = state.workspace
    if workspace is None:
        return state

    if isinstance(action, SetCurrentPage):
        if action.page_id is None:
            if state.current_page is None:
                return state
            return state.model_copy(update={"current_page": None})
        page = find_page(workspace, action.page_id)
        if page is None or page is state.current_page:
            return state
        return state.model_copy(update={"current_page": page})

    if isinstance(action, AddPage):
        if not action.page.blocks:
            return state
        return _with_workspace(
            state, add_page(workspace, reorder_all(action.page), action.parent_id)
        )

    if isinstance(action, UpdatePage):
        page = find_page(workspace, action.page_id)
        updates = {
            key: value for key, value in action.updates.items()
            if key in EDITABLE_PAGE_FIELDS
        }
        if page is None or not updates:
            return state
        updates["updated_at"] = action.updated_at
        updated = Page.model_validate({**page.model_dump(), **updates})
        return _with_workspace(state, replace_page(workspace, updated))

    if isinstance(action, DeletePage):
        return _with_workspace(state, remove_page(workspace, action.page_id))

    if isinstance(action, UpdateBlocks):
        page = find_page(workspace, action.page_id)
        if page is None or not action.blocks:
            return state
        page = reorder_all(page.model_copy(
            update={"blocks": list(action.blocks), "updated_at": action.updated_at}
        ))
        return _with_workspace(state, replace_page(workspace, page))

    return state
