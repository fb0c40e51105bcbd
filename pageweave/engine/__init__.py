"""Pure editing operations on pages and workspaces."""

from .blocks import (
    MoveDirection,
    block_index,
    can_move,
    delete_block,
    find_block,
    insert_block,
    insert_generated_content,
    move_block,
    ordered_blocks,
    reorder_all,
    sync_metadata,
    update_block,
)
from .pages import (
    PageNotFoundError,
    add_page,
    ancestors,
    child_pages,
    descendant_ids,
    find_page,
    remove_page,
    replace_page,
    require_page,
    root_pages,
    walk_pages,
)

__all__ = [
    "MoveDirection",
    "block_index",
    "can_move",
    "delete_block",
    "find_block",
    "insert_block",
    "insert_generated_content",
    "move_block",
    "ordered_blocks",
    "reorder_all",
    "sync_metadata",
    "update_block",
    "PageNotFoundError",
    "add_page",
    "ancestors",
    "child_pages",
    "descendant_ids",
    "find_page",
    "remove_page",
    "replace_page",
    "require_page",
    "root_pages",
    "walk_pages",
]
