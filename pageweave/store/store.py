"""
The workspace store: the single holder of editor state.
"""

import logging
from typing import Callable, List, Optional

from .actions import Action
from .reducer import WorkspaceState, workspace_reducer


Listener = Callable[[WorkspaceState], None]
Reducer = Callable[[WorkspaceState, Action], WorkspaceState]


class WorkspaceStore:
    """
    Holds the current WorkspaceState and applies actions to it.

    Dispatch is synchronous: the reducer runs to completion, the new state
    is installed, and only then are subscribers called with it. Subscribers
    are not called for actions that leave the state unchanged.
    """

    def __init__(self, initial_state: Optional[WorkspaceState] = None,
                 reducer: Reducer = workspace_reducer):
        """
        Initialize the store.

        Args:
            initial_state: Starting state, empty by default
            reducer: State transition function
        """
        self._state = initial_state or WorkspaceState()
        self._reducer = reducer
        self._listeners: List[Listener] = []
        self._reducing = False

    def get_state(self) -> WorkspaceState:
        return self._state

    def dispatch(self, action: Action) -> WorkspaceState:
        """
        Apply an action and notify subscribers if the state changed.

        Args:
            action: The action to apply

        Returns:
            The state after the action

        Raises:
            RuntimeError: If called from inside the reducer
            pydantic.ValidationError: If the action carries invalid values;
                the state is left unchanged
        """
        if self._reducing:
            raise RuntimeError("Reducers may not dispatch actions")

        self._reducing = True
        try:
            next_state = self._reducer(self._state, action)
        finally:
            self._reducing = False

        if next_state is self._state:
            return next_state

        self._state = next_state
        for listener in list(self._listeners):
            try:
                listener(next_state)
            except Exception as e:
                logging.error(f"Store subscriber failed after {type(action).__name__}: {e}")
            # A nested dispatch has already notified everyone of a newer state
            if self._state is not next_state:
                break

        return next_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a callback for state changes.

        Args:
            listener: Called with the new state after every change

        Returns:
            A function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe
