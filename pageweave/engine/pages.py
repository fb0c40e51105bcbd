"""
Page tree operations for Pageweave.

A workspace keeps all pages in one flat list. Root pages are the ones
without a parent and keep their list order; children are ordered by their
parent's ``child_ids``. These functions return new workspaces and never
modify their input.
"""

from typing import Iterator, List, Optional, Set, Tuple

from ..models import Page, Workspace


class PageNotFoundError(LookupError):
    """Raised when an operation requires a page that is not in the workspace."""


def find_page(workspace: Workspace, page_id: Optional[str]) -> Optional[Page]:
    """
    Look up a page anywhere in the tree.

    Args:
        workspace: The workspace to search
        page_id: The page id

    Returns:
        The page, or None if it does not exist
    """
    if page_id is None:
        return None
    for page in workspace.pages:
        if page.id == page_id:
            return page
    return None


def require_page(workspace: Workspace, page_id: str) -> Page:
    """
    Look up a page that the caller knows exists.

    Raises:
        PageNotFoundError: If the page is not in the workspace
    """
    page = find_page(workspace, page_id)
    if page is None:
        raise PageNotFoundError(f"Page not found: {page_id}")
    return page


def root_pages(workspace: Workspace) -> List[Page]:
    return [page for page in workspace.pages if page.parent_id is None]


def child_pages(workspace: Workspace, page_id: str) -> List[Page]:
    """Return the children of a page in order, skipping dangling ids."""
    parent = find_page(workspace, page_id)
    if parent is None:
        return []
    by_id = {page.id: page for page in workspace.pages}
    return [by_id[child_id] for child_id in parent.child_ids if child_id in by_id]


def walk_pages(workspace: Workspace) -> Iterator[Tuple[Page, int]]:
    """
    Iterate over the page tree depth-first.

    Yields:
        Tuples of (page, depth), depth 0 being a root page
    """
    stack = [(page, 0) for page in reversed(root_pages(workspace))]
    seen: Set[str] = set()
    while stack:
        page, depth = stack.pop()
        if page.id in seen:
            continue
        seen.add(page.id)
        yield page, depth
        for child in reversed(child_pages(workspace, page.id)):
            stack.append((child, depth + 1))


def descendant_ids(workspace: Workspace, page_id: str) -> List[str]:
    """Return the ids of every page below page_id, depth-first."""
    result: List[str] = []
    stack = list(reversed(child_pages(workspace, page_id)))
    while stack:
        page = stack.pop()
        if page.id in result or page.id == page_id:
            continue
        result.append(page.id)
        stack.extend(reversed(child_pages(workspace, page.id)))
    return result


def ancestors(workspace: Workspace, page_id: str) -> List[Page]:
    """
    Return the ancestors of a page, from its immediate parent to the root.
    """
    result: List[Page] = []
    seen = {page_id}
    page = find_page(workspace, page_id)
    while page is not None and page.parent_id is not None:
        parent = find_page(workspace, page.parent_id)
        if parent is None or parent.id in seen:
            break
        seen.add(parent.id)
        result.append(parent)
        page = parent
    return result


def add_page(workspace: Workspace, page: Page, parent_id: Optional[str] = None) -> Workspace:
    """
    Add a page to the workspace.

    Args:
        workspace: The workspace to add to
        page: The new page
        parent_id: Parent to nest the page under; falls back to the page's own
            parent_id. An unknown parent makes the page a root page.

    Returns:
        The updated workspace, or the same workspace if the page id is taken
    """
    if find_page(workspace, page.id) is not None:
        return workspace

    parent = find_page(workspace, parent_id if parent_id is not None else page.parent_id)
    page = page.model_copy(update={"parent_id": parent.id if parent else None})

    if parent is None:
        return workspace.model_copy(update={"pages": workspace.pages + [page]})

    # Keep the arena in depth-first order: the new last child goes right
    # after its parent's existing subtree.
    subtree = {parent.id, *descendant_ids(workspace, parent.id)}
    insert_at = max(index for index, existing in enumerate(workspace.pages)
                    if existing.id in subtree) + 1

    pages = []
    for existing in workspace.pages:
        if existing.id == parent.id:
            existing = existing.model_copy(update={"child_ids": existing.child_ids + [page.id]})
        pages.append(existing)
    pages.insert(insert_at, page)

    return workspace.model_copy(update={"pages": pages})


def replace_page(workspace: Workspace, page: Page) -> Workspace:
    """
    Substitute the page with the same id.

    Returns:
        The updated workspace, or the same workspace if the id is unknown
    """
    if find_page(workspace, page.id) is None:
        return workspace
    pages = [page if existing.id == page.id else existing for existing in workspace.pages]
    return workspace.model_copy(update={"pages": pages})


def remove_page(workspace: Workspace, page_id: str) -> Workspace:
    """
    Remove a page together with all of its descendants.

    Returns:
        The updated workspace, or the same workspace if the id is unknown
    """
    page = find_page(workspace, page_id)
    if page is None:
        return workspace

    removed = {page_id, *descendant_ids(workspace, page_id)}
    pages = []
    for existing in workspace.pages:
        if existing.id in removed:
            continue
        if existing.id == page.parent_id:
            existing = existing.model_copy(
                update={"child_ids": [cid for cid in existing.child_ids if cid != page_id]}
            )
        pages.append(existing)

    return workspace.model_copy(update={"pages": pages})
