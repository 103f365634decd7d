"""Selection state machine over the current match list."""

from .controller import SelectionController, SelectionState

__all__ = ["SelectionController", "SelectionState"]
