"""
Pageweave: a block-based document editor core.

Holds a workspace of nested pages made of typed blocks, edits them through
pure operations, and keeps the result in a single store that is saved as a
full snapshot after every change.
"""

__version__ = "0.1.0"
__author__ = "Pageweave Project"

# Import main components
from .models import Block, BlockType, Page, Workspace
from .store import WorkspaceStore, WorkspaceState
from .database import DatabaseManager
from .persistence import PersistenceManager
from .controller import InputController, KeyEvent

__all__ = [
    "Block",
    "BlockType",
    "Page",
    "Workspace",
    "WorkspaceStore",
    "WorkspaceState",
    "DatabaseManager",
    "PersistenceManager",
    "InputController",
    "KeyEvent"
]
