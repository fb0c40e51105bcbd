#!/usr/bin/env python3
"""
Pageweave - Block-based document editor

Command-line entry point. Loads the workspace snapshot from the configured
database, applies one editing command through the input controller, and lets
the store's autosave write the result back.
"""

import logging
import sys
import argparse
from typing import List, Optional

from pageweave import __version__
from pageweave.config import config
from pageweave.controller import InputController
from pageweave.database import DatabaseManager
from pageweave.engine import MoveDirection, find_block, find_page, ordered_blocks, walk_pages
from pageweave.models import BlockType, Page, block_text
from pageweave.persistence import PersistenceManager, default_workspace
from pageweave.store import SetWorkspace, WorkspaceStore


def setup_logging():
    """Configure logging for the application."""
    level = getattr(logging, config.get("logging.level", "INFO").upper())
    format_str = config.get("logging.format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    log_file = config.log_filename

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(log_file)
        ]
    )


def format_block(block) -> str:
    """
    Render one block as a single line of text.

    Args:
        block: The block to render

    Returns:
        "[position] type id: text"
    """
    text = block_text(block)
    if block.type == BlockType.TO_DO:
        text = f"[{'x' if block.content.checked else ' '}] {text}"
    elif block.type == BlockType.IMAGE:
        text = block.content.url
    return f"[{block.position}] {block.type} {block.id}: {text}"


def print_page(page: Page):
    """Print a page title followed by its blocks in document order."""
    print(f"{page.icon + ' ' if page.icon else ''}{page.title} ({page.id})")
    for block in ordered_blocks(page):
        print(f"  {format_block(block)}")


def print_tree(store: WorkspaceStore):
    """Print the page tree, marking the current page."""
    state = store.get_state()
    for page, depth in walk_pages(state.workspace):
        marker = "*" if page.id == state.current_page_id else " "
        archived = " (archived)" if page.archived else ""
        print(f"{marker} {'  ' * depth}{page.title} ({page.id}){archived}")


def run_command(args, store: WorkspaceStore, controller: InputController) -> int:
    """
    Apply a parsed command to the loaded store.

    Args:
        args: Parsed command line arguments
        store: Store holding the loaded workspace
        controller: Controller bound to the store

    Returns:
        Process exit code
    """
    if args.page and not controller.open_page(args.page):
        print(f"Page not found: {args.page}")
        return 1

    if args.command == "pages":
        print_tree(store)
        return 0

    if args.command == "reset":
        store.dispatch(SetWorkspace(default_workspace()))
        print("Workspace reset to defaults")
        return 0

    if args.command == "new-page":
        page_id = controller.create_page(title=args.title, parent_id=args.parent)
        print(f"Created page {page_id}")
        return 0

    if args.command == "open":
        if not controller.open_page(args.page_id):
            print(f"Page not found: {args.page_id}")
            return 1
        print_page(controller.current_page)
        return 0

    if args.command == "remove-page":
        if find_page(store.get_state().workspace, args.page_id) is None:
            print(f"Page not found: {args.page_id}")
            return 1
        controller.delete_page(args.page_id)
        print(f"Removed page {args.page_id}")
        return 0

    page = controller.current_page
    if page is None:
        print("No page is open")
        return 1

    if args.command == "show":
        print_page(page)
    elif args.command == "rename":
        controller.rename_page(args.title)
    elif args.command == "add":
        block_id = controller.insert_block(args.type, after_block_id=args.after)
        if args.text is not None:
            controller.edit_block(block_id, {"text": args.text})
        print(f"Added block {block_id}")
    elif args.command == "edit":
        patch = {}
        if args.text is not None:
            patch["text"] = args.text
        if args.checked is not None:
            patch["checked"] = args.checked
        if find_block(page, args.block_id) is None:
            print(f"Block not found: {args.block_id}")
            return 1
        controller.edit_block(args.block_id, patch)
    elif args.command == "delete":
        if find_block(page, args.block_id) is None:
            print(f"Block not found: {args.block_id}")
            return 1
        if len(page.blocks) <= 1:
            print("A page must keep at least one block")
            return 1
        controller.delete_block(args.block_id)
    elif args.command == "move":
        if not controller.move_block(args.block_id, args.direction):
            print(f"Block {args.block_id} cannot move {args.direction}")
            return 1

    return 0


def parse_arguments(argv: Optional[List[str]] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Pageweave - Block-based document editor",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py pages                              # Show the page tree
  python main.py show                               # Show the first page
  python main.py add heading-2 --text "Notes"       # Append a heading
  python main.py --page PAGE_ID move BLOCK_ID up    # Move a block on a page
        """
    )

    parser.add_argument(
        "--db",
        type=str,
        help="Path to the DuckDB database (default: from config.yaml)"
    )

    parser.add_argument(
        "--page",
        type=str,
        help="Page to operate on (default: the first root page)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"Pageweave {__version__}"
    )

    commands = parser.add_subparsers(dest="command", required=True)

    commands.add_parser("pages", help="Show the page tree")
    commands.add_parser("show", help="Show the blocks of a page")
    commands.add_parser("reset", help="Replace the workspace with the default one")

    open_page = commands.add_parser("open", help="Open a page and show its blocks")
    open_page.add_argument("page_id")

    new_page = commands.add_parser("new-page", help="Create a page")
    new_page.add_argument("--title", type=str, help="Page title")
    new_page.add_argument("--parent", type=str, help="Parent page id")

    remove_page = commands.add_parser("remove-page", help="Delete a page and its subpages")
    remove_page.add_argument("page_id")

    rename = commands.add_parser("rename", help="Rename the page")
    rename.add_argument("title")

    add = commands.add_parser("add", help="Insert a block")
    add.add_argument("type", choices=[block_type.value for block_type in BlockType])
    add.add_argument("--after", type=str, help="Block id to insert after (default: append)")
    add.add_argument("--text", type=str, help="Initial text")

    edit = commands.add_parser("edit", help="Change a block's content")
    edit.add_argument("block_id")
    edit.add_argument("--text", type=str, help="New text")
    edit.add_argument("--checked", action=argparse.BooleanOptionalAction, default=None,
                      help="Tick or untick a to-do")

    delete = commands.add_parser("delete", help="Delete a block")
    delete.add_argument("block_id")

    move = commands.add_parser("move", help="Move a block up or down")
    move.add_argument("block_id")
    move.add_argument("direction", choices=[direction.value for direction in MoveDirection])

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = parse_arguments(argv)
    setup_logging()

    with DatabaseManager(args.db or config.database_path) as db:
        db.initialize_database()

        store = WorkspaceStore()
        persistence = PersistenceManager(db)
        persistence.attach(store)
        persistence.bootstrap(store)

        controller = InputController(store)
        try:
            return run_command(args, store, controller)
        finally:
            persistence.detach()


if __name__ == "__main__":
    sys.exit(main())
