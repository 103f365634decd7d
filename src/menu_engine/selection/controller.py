"""Current-item tracking and cross-page navigation over a match list."""

from __future__ import annotations

from enum import Enum
from typing import Optional, Sequence

from menu_engine.candidates import Candidate, CandidateStore
from menu_engine.matching import MatchList
from menu_engine.paging import EMPTY_WINDOW, Paginator, Window


class SelectionState(str, Enum):
    EMPTY = "empty"
    ACTIVE = "active"


class SelectionController:
    """Owns ``current`` and the window; every move returns whether it changed."""

    def __init__(self, store: CandidateStore, paginator: Paginator) -> None:
        self.store = store
        self.paginator = paginator
        self.matches = MatchList()
        self.current: Optional[int] = None
        self.window: Window = EMPTY_WINDOW
        self._texts: Sequence[str] = ()

    @property
    def state(self) -> SelectionState:
        if self.current is None:
            return SelectionState.EMPTY
        return SelectionState.ACTIVE

    def reset(self, matches: MatchList) -> None:
        self.matches = matches
        self._texts = [self.store[index].text for index in matches]
        if not matches:
            self.current = None
            self.window = EMPTY_WINDOW
            return
        self.current = 0
        self._anchor(0)

    def current_candidate(self) -> Optional[Candidate]:
        if self.current is None:
            return None
        return self.store[self.matches[self.current]]

    def visible(self) -> range:
        return self.paginator.visible(self.window, len(self.matches))

    def at_head(self) -> bool:
        return self.current is not None and self.current == self.matches.head

    def move_next(self) -> bool:
        if self.current is None:
            return False
        following = self.matches.successor(self.current)
        if following is None:
            return False
        self.current = following
        if following == self.window.next:
            self._anchor(following)
        return True

    def move_previous(self) -> bool:
        if self.current is None:
            return False
        preceding = self.matches.predecessor(self.current)
        if preceding is None:
            return False
        leaving_page = self.current == self.window.anchor
        self.current = preceding
        if leaving_page and self.window.prev is not None:
            self._anchor(self.window.prev)
        return True

    def page_next(self) -> bool:
        if self.window.next is None:
            return False
        self.current = self.window.next
        self._anchor(self.window.next)
        return True

    def page_previous(self) -> bool:
        if self.window.prev is None:
            # First page: select its head.
            if self.current is None or self.current == self.window.anchor:
                return False
            self.current = self.window.anchor
            return True
        self.current = self.window.prev
        self._anchor(self.window.prev)
        return True

    def jump_to_start(self) -> bool:
        head = self.matches.head
        if head is None:
            return False
        changed = self.current != head or self.window.anchor != head
        self.current = head
        self._anchor(head)
        return changed

    def jump_to_end(self) -> bool:
        tail = self.matches.tail
        if tail is None:
            return False
        before = (self.current, self.window)
        if self.window.next is not None:
            # Lay the last page out backwards from the tail, then slide the
            # anchor forward until the page reaches the end of the list.
            self._anchor(tail)
            start = self.window.prev if self.window.prev is not None else tail
            self._anchor(start)
            while self.window.next is not None and self.window.anchor is not None:
                self._anchor(self.window.anchor + 1)
        self.current = tail
        return before != (self.current, self.window)

    def _anchor(self, position: int) -> None:
        self.window = self.paginator.calcoffsets(self._texts, position)


__all__ = ["SelectionController", "SelectionState"]
