"""
Workspace persistence for Pageweave.

Loads the saved workspace at startup and writes a full snapshot back to the
same storage slot after every change. A missing or unreadable snapshot is
replaced by the default workspace; a failed write is logged and the
in-memory state stays authoritative.
"""

import duckdb
import logging
from typing import Callable, Optional

from ..config import config
from ..database import DatabaseManager
from ..engine import root_pages
from ..models import Workspace
from ..store import SetCurrentPage, SetLoading, SetWorkspace, WorkspaceState, WorkspaceStore
from .snapshot import SnapshotError, default_workspace, dumps_workspace, loads_workspace


class PersistenceManager:
    """
    Connects a WorkspaceStore to a snapshot slot in the database.
    """

    def __init__(self, db: DatabaseManager, slot_key: Optional[str] = None):
        """
        Initialize the persistence manager.

        Args:
            db: Connected database manager
            slot_key: Storage slot for the workspace (defaults to config value)
        """
        self.db = db
        self.slot_key = slot_key or config.workspace_key
        self.used_default = False
        self._last_saved: Optional[Workspace] = None
        self._unsubscribe: Optional[Callable[[], None]] = None

    def load_workspace(self) -> Workspace:
        """
        Load the saved workspace, falling back to the default one.

        Returns:
            The stored workspace, or a freshly seeded default workspace if the
            slot is empty or its contents cannot be decoded
        """
        self.used_default = False

        try:
            raw = self.db.read_slot(self.slot_key)
        except duckdb.Error as e:
            logging.error(f"Failed to read workspace slot {self.slot_key}: {e}")
            raw = None

        if raw is not None:
            try:
                workspace = loads_workspace(raw)
                logging.info(f"Loaded workspace {workspace.id} with {len(workspace.pages)} pages")
                return workspace
            except SnapshotError as e:
                logging.error(f"Failed to load workspace: {e}")
        else:
            logging.info(f"No saved workspace in slot {self.slot_key}")

        logging.info("Initializing default workspace")
        self.used_default = True
        return default_workspace()

    def save_workspace(self, workspace: Workspace) -> bool:
        """
        Write a full snapshot of the workspace.

        Args:
            workspace: The workspace to save

        Returns:
            True if the snapshot was written, False if storage failed
        """
        try:
            self.db.write_slot(self.slot_key, dumps_workspace(workspace))
        except (duckdb.Error, OSError) as e:
            logging.error(f"Failed to save workspace {workspace.id}: {e}")
            return False

        self._last_saved = workspace
        return True

    def _on_state_change(self, state: WorkspaceState) -> None:
        if state.workspace is None or state.workspace is self._last_saved:
            return
        self.save_workspace(state.workspace)

    def attach(self, store: WorkspaceStore) -> None:
        """
        Save automatically whenever the store's workspace changes.

        Args:
            store: The store to observe
        """
        self.detach()
        self._unsubscribe = store.subscribe(self._on_state_change)

    def detach(self) -> None:
        """Stop saving automatically."""
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None

    def bootstrap(self, store: WorkspaceStore) -> WorkspaceState:
        """
        Fill an empty store from storage and open the first root page.

        Args:
            store: The store to initialize

        Returns:
            The store state once loading has finished
        """
        store.dispatch(SetLoading(True))
        try:
            workspace = self.load_workspace()
            store.dispatch(SetWorkspace(workspace))

            roots = root_pages(workspace)
            active = [page for page in roots if not page.archived] or roots
            if active:
                store.dispatch(SetCurrentPage(active[0].id))
        finally:
            store.dispatch(SetLoading(False))

        return store.get_state()
