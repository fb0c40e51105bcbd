"""
Snapshot codec for Pageweave workspaces.

The stored form nests child pages under their parent in a ``children`` list
and uses camelCase keys. In memory the pages live in a flat arena, so
decoding flattens the tree and encoding rebuilds it.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Set

from pydantic import ValidationError

from ..config import config
from ..engine import child_pages, reorder_all, root_pages
from ..models import (
    BlockMetadata,
    BlockType,
    Page,
    TextBlock,
    TextContent,
    Workspace,
    generate_id,
    new_block,
    utc_now,
)


class SnapshotError(ValueError):
    """Raised when stored workspace data cannot be decoded."""


def _page_to_snapshot(workspace: Workspace, page: Page) -> Dict[str, Any]:
    data = page.model_dump(mode="json", by_alias=True, exclude_none=True, exclude={"child_ids"})
    children = child_pages(workspace, page.id)
    if children:
        data["children"] = [_page_to_snapshot(workspace, child) for child in children]
    return data


def workspace_to_snapshot(workspace: Workspace) -> Dict[str, Any]:
    """
    Convert a workspace into its JSON-ready stored form.

    Args:
        workspace: The workspace to encode

    Returns:
        A dict of plain JSON types with root pages under "pages"
    """
    data = workspace.model_dump(mode="json", by_alias=True, exclude_none=True, exclude={"pages"})
    data["pages"] = [_page_to_snapshot(workspace, page) for page in root_pages(workspace)]
    return data


def _heal_page(page: Page) -> Page:
    if not page.blocks:
        logging.warning(f"Page {page.id} was stored without blocks; adding an empty paragraph")
        page = page.model_copy(update={"blocks": [new_block(BlockType.PARAGRAPH)]})
    return reorder_all(page)


def _collect_pages(raw_page: Any, parent_id: Optional[str], arena: List[Page],
                   seen: Set[str]) -> str:
    if not isinstance(raw_page, dict):
        raise SnapshotError(f"Expected a page object, got {type(raw_page).__name__}")

    raw_children = raw_page.get("children") or []
    if not isinstance(raw_children, list):
        raise SnapshotError("Page children must be a list")

    fields = {key: value for key, value in raw_page.items() if key not in ("children", "childIds")}
    fields["parentId"] = parent_id
    page = Page.model_validate(fields)

    if page.id in seen:
        raise SnapshotError(f"Duplicate page id: {page.id}")
    seen.add(page.id)

    slot = len(arena)
    arena.append(page)
    child_ids = [_collect_pages(child, page.id, arena, seen) for child in raw_children]
    arena[slot] = _heal_page(page.model_copy(update={"child_ids": child_ids}))
    return page.id


def workspace_from_snapshot(data: Any) -> Workspace:
    """
    Build a workspace from its stored form.

    Block positions are normalised and empty pages receive an empty
    paragraph, so a snapshot left behind by a torn write still yields a
    workspace that satisfies the page invariants.

    Args:
        data: The decoded JSON object

    Returns:
        The workspace

    Raises:
        SnapshotError: If the data does not describe a workspace
    """
    if not isinstance(data, dict):
        raise SnapshotError(f"Expected a workspace object, got {type(data).__name__}")

    raw_pages = data.get("pages") or []
    if not isinstance(raw_pages, list):
        raise SnapshotError("Workspace pages must be a list")

    try:
        workspace = Workspace.model_validate({**data, "pages": []})
        arena: List[Page] = []
        seen: Set[str] = set()
        for raw_page in raw_pages:
            _collect_pages(raw_page, None, arena, seen)
    except ValidationError as e:
        raise SnapshotError(f"Invalid workspace data: {e}") from e

    return workspace.model_copy(update={"pages": arena})


def dumps_workspace(workspace: Workspace) -> str:
    """Serialize a workspace to JSON text."""
    return json.dumps(workspace_to_snapshot(workspace), ensure_ascii=False)


def loads_workspace(raw: str) -> Workspace:
    """
    Parse JSON text produced by dumps_workspace.

    Raises:
        SnapshotError: If the text is not valid JSON or not a workspace
    """
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, TypeError) as e:
        raise SnapshotError(f"Malformed workspace JSON: {e}") from e
    return workspace_from_snapshot(data)


def default_workspace() -> Workspace:
    """
    Build the workspace used on first run or after a failed load: one root
    page holding a heading and an introductory paragraph.
    """
    seed = config.seed_settings
    now = utc_now()
    page = Page(
        id=generate_id(),
        title=seed["page_title"],
        blocks=[
            TextBlock(
                id=generate_id(),
                type=BlockType.HEADING_1.value,
                content=TextContent(text=seed["page_title"]),
                metadata=BlockMetadata(level=1),
                position=0,
            ),
            TextBlock(
                id=generate_id(),
                type=BlockType.PARAGRAPH.value,
                content=TextContent(
                    text="Start creating content with the block editor. Add pages, "
                         "organize your thoughts, and keep everything in one place."
                ),
                position=1,
            ),
        ],
        created_at=now,
        updated_at=now,
    )
    return Workspace(
        id=seed["workspace_id"],
        name=seed["workspace_name"],
        pages=[page],
    )
