"""
Input and focus handling for Pageweave.

The controller turns key presses and clicks on blocks into editing engine
calls, dispatches the results to the store, and tells the rendering layer
which block should hold the caret next. Rendering is reached only through
the focus handler callback.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Union

from ..config import config
from ..engine import (
    MoveDirection,
    can_move,
    delete_block,
    find_block,
    insert_block,
    insert_generated_content,
    move_block,
    ordered_blocks,
    require_page,
    update_block,
)
from ..models import BlockType, Page, block_text, new_page
from ..store import AddPage, DeletePage, SetCurrentPage, UpdateBlocks, UpdatePage, WorkspaceStore


@dataclass(frozen=True)
class KeyEvent:
    """A key press on a focused block, in UI-toolkit neutral terms."""
    key: str
    shift: bool = False
    ctrl: bool = False
    meta: bool = False
    alt: bool = False

    @property
    def has_modifier(self) -> bool:
        return self.shift or self.ctrl or self.meta or self.alt


@dataclass(frozen=True)
class FocusRequest:
    """Ask the rendering layer to focus a block."""
    block_id: str
    caret_at_end: bool = False


@dataclass(frozen=True)
class KeyResult:
    handled: bool = False
    prevent_default: bool = False


NOT_HANDLED = KeyResult()
HANDLED = KeyResult(handled=True, prevent_default=True)

FocusHandler = Callable[[FocusRequest], None]


class InputController:
    """
    Applies user input on the store's current page.
    """

    def __init__(self, store: WorkspaceStore, focus_handler: Optional[FocusHandler] = None,
                 move_modifier: Optional[str] = None):
        """
        Initialize the controller.

        Args:
            store: The workspace store to read from and dispatch to
            focus_handler: Called whenever a block should receive focus
            move_modifier: "meta" or "ctrl"; the key held with the arrow keys
                to move blocks (defaults to the configured platform modifier)
        """
        self.store = store
        self.focus_handler = focus_handler
        self.move_modifier = move_modifier or config.move_modifier
        self.selected_block_id: Optional[str] = None
        self.last_focus_request: Optional[FocusRequest] = None

    @property
    def current_page(self) -> Optional[Page]:
        return self.store.get_state().current_page

    # Focus

    def _focus(self, block_id: Optional[str], caret_at_end: bool = False) -> None:
        self.selected_block_id = block_id
        if block_id is None:
            return
        request = FocusRequest(block_id=block_id, caret_at_end=caret_at_end)
        self.last_focus_request = request
        if self.focus_handler:
            self.focus_handler(request)

    def select_block(self, block_id: str) -> bool:
        """Mark a block of the current page as selected, without moving focus."""
        page = self.current_page
        if page is None or find_block(page, block_id) is None:
            return False
        self.selected_block_id = block_id
        return True

    def _commit(self, before: Page, after: Page) -> bool:
        if after is before:
            return False
        self.store.dispatch(UpdateBlocks(page_id=before.id, blocks=after.blocks))
        return True

    # Keyboard

    def _is_move_chord(self, event: KeyEvent) -> bool:
        return event.key in ("ArrowUp", "ArrowDown") and getattr(event, self.move_modifier, False)

    def handle_key(self, block_id: str, event: KeyEvent) -> KeyResult:
        """
        Handle a key press on a block of the current page.

        Args:
            block_id: The focused block
            event: The key press

        Returns:
            Whether the key was consumed and the default action must be
            suppressed
        """
        page = self.current_page
        block = find_block(page, block_id) if page is not None else None
        if block is None:
            return NOT_HANDLED

        if event.key == "Enter" and not event.has_modifier:
            if block.type == BlockType.CODE:
                return NOT_HANDLED
            self.insert_block(BlockType.PARAGRAPH, after_block_id=block_id)
            return HANDLED

        if event.key == "Backspace" and not block_text(block):
            self.delete_block(block_id)
            return HANDLED

        if self._is_move_chord(event):
            direction = MoveDirection.UP if event.key == "ArrowUp" else MoveDirection.DOWN
            self.move_block(block_id, direction)
            return HANDLED

        return NOT_HANDLED

    # Block operations on the current page

    def insert_block(self, block_type: Union[BlockType, str],
                     after_block_id: Optional[str] = None) -> Optional[str]:
        """
        Insert a block on the current page and focus it with the caret at
        the end.

        Returns:
            The new block id, or None when no page is open
        """
        page = self.current_page
        if page is None:
            return None
        updated, new_id = insert_block(page, block_type, after_block_id)
        self._commit(page, updated)
        self._focus(new_id, caret_at_end=True)
        return new_id

    def add_block(self, block_type: Union[BlockType, str]) -> Optional[str]:
        """Insert a block after the selected one, or at the end."""
        return self.insert_block(block_type, after_block_id=self.selected_block_id)

    def click_empty_space(self) -> Optional[str]:
        """Append an empty paragraph, as a click below the last block does."""
        return self.insert_block(BlockType.PARAGRAPH)

    def edit_block(self, block_id: str, content_patch: Dict[str, Any]) -> bool:
        page = self.current_page
        if page is None:
            return False
        return self._commit(page, update_block(page, block_id, content_patch))

    def delete_block(self, block_id: str) -> Optional[str]:
        """
        Delete a block of the current page and focus its neighbour.

        Returns:
            The id of the newly focused block, or None if nothing was deleted
            or no neighbour remains
        """
        page = self.current_page
        if page is None:
            return None
        updated, next_selection = delete_block(page, block_id)
        if not self._commit(page, updated):
            logging.debug(f"Refused to delete block {block_id} on page {page.id}")
            return None
        self._focus(next_selection, caret_at_end=True)
        return next_selection

    def delete_selected(self) -> Optional[str]:
        if self.selected_block_id is None:
            return None
        return self.delete_block(self.selected_block_id)

    def move_block(self, block_id: str, direction: Union[MoveDirection, str]) -> bool:
        """
        Move a block of the current page one step; it keeps the selection.
        """
        page = self.current_page
        if page is None:
            return False
        moved = self._commit(page, move_block(page, block_id, direction))
        if moved:
            self._focus(block_id)
        elif find_block(page, block_id) is not None:
            self.selected_block_id = block_id
        return moved

    def move_selected(self, direction: Union[MoveDirection, str]) -> bool:
        if self.selected_block_id is None:
            return False
        return self.move_block(self.selected_block_id, direction)

    def can_move_up(self) -> bool:
        page = self.current_page
        if page is None or self.selected_block_id is None:
            return False
        return can_move(page, self.selected_block_id, MoveDirection.UP)

    def can_move_down(self) -> bool:
        page = self.current_page
        if page is None or self.selected_block_id is None:
            return False
        return can_move(page, self.selected_block_id, MoveDirection.DOWN)

    # Pages

    def open_page(self, page_id: Optional[str]) -> bool:
        """
        Make a page current and focus its first empty block, if any.

        Returns:
            True if the page is now open
        """
        self.store.dispatch(SetCurrentPage(page_id))
        page = self.current_page
        if page is None or page.id != page_id:
            self.selected_block_id = None
            return False

        empty = [block for block in ordered_blocks(page) if not block_text(block)]
        if empty:
            self._focus(empty[0].id, caret_at_end=True)
        else:
            self.selected_block_id = None
        return True

    def create_page(self, title: Optional[str] = None,
                    parent_id: Optional[str] = None) -> Optional[str]:
        """
        Create a page, nest it under parent_id if given, and open it.

        Returns:
            The new page id, or None when no workspace is loaded
        """
        if self.store.get_state().workspace is None:
            return None
        page = new_page(title=title, parent_id=parent_id)
        self.store.dispatch(AddPage(page=page, parent_id=parent_id))
        self.open_page(page.id)
        return page.id

    def rename_page(self, title: str) -> bool:
        page = self.current_page
        if page is None:
            return False
        self.store.dispatch(UpdatePage(page_id=page.id, updates={"title": title}))
        return True

    def delete_page(self, page_id: str) -> None:
        self.store.dispatch(DeletePage(page_id))
        if self.current_page is None:
            self.selected_block_id = None

    # Collaborators

    def insert_generated_content(self, page_id: str, after_block_id: Optional[str],
                                 text: str) -> str:
        """
        Insert a finished piece of generated text as a paragraph.

        Args:
            page_id: Page to insert into
            after_block_id: Block to insert after; None appends
            text: The generated text, multiple items pre-joined one per line

        Returns:
            The id of the new paragraph

        Raises:
            PageNotFoundError: If page_id is not in the workspace
            RuntimeError: If no workspace is loaded
        """
        workspace = self.store.get_state().workspace
        if workspace is None:
            raise RuntimeError("No workspace loaded")

        page = require_page(workspace, page_id)
        updated, new_id = insert_generated_content(page, after_block_id, text)
        self._commit(page, updated)
        logging.info(f"Inserted generated content into page {page_id} as block {new_id}")

        if self.current_page is not None and self.current_page.id == page_id:
            self._focus(new_id, caret_at_end=True)
        return new_id
