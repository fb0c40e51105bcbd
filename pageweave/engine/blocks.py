"""
Block editing operations for Pageweave.

Every function here takes a page and returns a new page; the input is never
modified. Block positions are renumbered from scratch after each structural
change, so a page always leaves these functions with positions 0..N-1 in
document order. Requests that cannot be honoured (unknown block ids, moves
past an edge, deleting the last block) return the page object unchanged.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from ..models import Block, BlockMetadata, BlockType, Page, default_metadata, new_block


class MoveDirection(str, Enum):
    UP = "up"
    DOWN = "down"


def ordered_blocks(page: Page) -> List[Block]:
    """Return the blocks of a page sorted by position (stable for ties)."""
    return sorted(page.blocks, key=lambda block: block.position)


def block_index(blocks: Sequence[Block], block_id: Optional[str]) -> Optional[int]:
    """Return the index of block_id in blocks, or None when absent."""
    if block_id is None:
        return None
    for index, block in enumerate(blocks):
        if block.id == block_id:
            return index
    return None


def find_block(page: Page, block_id: str) -> Optional[Block]:
    for block in page.blocks:
        if block.id == block_id:
            return block
    return None


def _renumber(blocks: Sequence[Block]) -> List[Block]:
    return [
        block if block.position == index else block.model_copy(update={"position": index})
        for index, block in enumerate(blocks)
    ]


def _with_blocks(page: Page, blocks: Sequence[Block]) -> Page:
    return page.model_copy(update={"blocks": _renumber(blocks)})


def reorder_all(page: Page) -> Page:
    """
    Normalise block positions to 0..N-1 following their current order.

    Blocks are sorted by position first, so gaps and duplicates left by a
    partial write are healed without changing the intended document order.

    Args:
        page: The page to normalise

    Returns:
        The normalised page, or the same page if it was already dense
    """
    renumbered = _renumber(ordered_blocks(page))
    if len(renumbered) == len(page.blocks) and all(
        new is old for new, old in zip(renumbered, page.blocks)
    ):
        return page
    return page.model_copy(update={"blocks": renumbered})


def insert_block(page: Page, block_type: Union[BlockType, str],
                 after_block_id: Optional[str] = None) -> Tuple[Page, str]:
    """
    Insert a new block with default content.

    Args:
        page: The page to insert into
        block_type: Variant of the new block
        after_block_id: Block to insert after; unknown or missing ids append
            the block at the end of the page

    Returns:
        Tuple of the updated page and the id of the new block
    """
    blocks = ordered_blocks(page)
    block = new_block(block_type)

    index = block_index(blocks, after_block_id)
    if index is None:
        blocks.append(block)
    else:
        blocks.insert(index + 1, block)

    return _with_blocks(page, blocks), block.id


def sync_metadata(block: Block) -> Block:
    """
    Copy the content fields mirrored in metadata (checked, language, color,
    heading level) onto the block's metadata. Content wins.
    """
    mirrored = default_metadata(BlockType(block.type), block.content)
    updates = mirrored.model_dump(exclude_none=True)
    if not updates:
        return block

    current = block.metadata or BlockMetadata()
    if all(getattr(current, key) == value for key, value in updates.items()):
        return block
    return block.model_copy(update={"metadata": current.model_copy(update=updates)})


def update_block(page: Page, block_id: str, content_patch: Dict[str, Any]) -> Page:
    """
    Shallow-merge content_patch into a block's content.

    Patch fields overwrite existing ones, the rest are preserved. Fields the
    block's variant does not define are ignored. Metadata fields that mirror
    content are brought back in sync.

    Args:
        page: The page holding the block
        block_id: Block to update
        content_patch: Content fields to overwrite

    Returns:
        The updated page, or the same page if block_id is unknown

    Raises:
        pydantic.ValidationError: If a patched value has the wrong type
    """
    blocks = list(page.blocks)
    index = block_index(blocks, block_id)
    if index is None:
        return page

    block = blocks[index]
    merged = {**block.content.model_dump(), **content_patch}
    content = type(block.content).model_validate(merged)
    blocks[index] = sync_metadata(block.model_copy(update={"content": content}))
    return page.model_copy(update={"blocks": blocks})


def delete_block(page: Page, block_id: str) -> Tuple[Page, Optional[str]]:
    """
    Remove a block and pick the block that should be selected next.

    The last remaining block of a page is never removed.

    Args:
        page: The page holding the block
        block_id: Block to remove

    Returns:
        Tuple of the updated page and the id of the next selection: the
        previous sibling if there is one, otherwise the following sibling.
        When nothing is removed the same page and None are returned.
    """
    blocks = ordered_blocks(page)
    index = block_index(blocks, block_id)
    if index is None or len(blocks) <= 1:
        return page, None

    del blocks[index]

    if index - 1 >= 0:
        next_selection = blocks[index - 1].id
    elif index < len(blocks):
        next_selection = blocks[index].id
    else:
        next_selection = None

    return _with_blocks(page, blocks), next_selection


def can_move(page: Page, block_id: str, direction: Union[MoveDirection, str]) -> bool:
    """Return True if move_block would change the page."""
    direction = MoveDirection(direction)
    blocks = ordered_blocks(page)
    index = block_index(blocks, block_id)
    if index is None:
        return False
    if direction == MoveDirection.UP:
        return index > 0
    return index < len(blocks) - 1


def move_block(page: Page, block_id: str, direction: Union[MoveDirection, str]) -> Page:
    """
    Swap a block with its neighbour above or below.

    Args:
        page: The page holding the block
        block_id: Block to move
        direction: "up" or "down"

    Returns:
        The updated page, or the same page when the block is unknown or
        already at that edge

    Raises:
        ValueError: If direction is not "up" or "down"
    """
    direction = MoveDirection(direction)
    if not can_move(page, block_id, direction):
        return page

    blocks = ordered_blocks(page)
    index = block_index(blocks, block_id)
    target = index - 1 if direction == MoveDirection.UP else index + 1
    blocks[index], blocks[target] = blocks[target], blocks[index]
    return _with_blocks(page, blocks)


def insert_generated_content(page: Page, after_block_id: Optional[str],
                             text: str) -> Tuple[Page, str]:
    """
    Insert externally generated text as a new paragraph.

    Behaves exactly like a user inserting a paragraph after after_block_id
    and typing text into it. Multi-item results arrive pre-joined, one item
    per line.

    Returns:
        Tuple of the updated page and the id of the new paragraph
    """
    page, block_id = insert_block(page, BlockType.PARAGRAPH, after_block_id)
    return update_block(page, block_id, {"text": text}), block_id
