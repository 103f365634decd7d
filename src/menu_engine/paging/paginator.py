"""Window computation over a match list for line and cost budgets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Sequence, cast

CostFunction = Callable[[str], float]


class LayoutMode(str, Enum):
    VERTICAL = "vertical"  # at most ``lines`` items, one per row
    HORIZONTAL = "horizontal"  # as many items as fit in ``budget``


@dataclass(frozen=True, slots=True)
class Window:
    """Positions into the match list describing the visible page.

    ``anchor`` is the first shown item, ``next`` the first item after the
    page (``None`` when the page reaches the end of the list) and ``prev``
    the anchor of the previous page (``None`` when ``anchor`` is the head).
    """

    anchor: Optional[int] = None
    next: Optional[int] = None
    prev: Optional[int] = None

    @property
    def empty(self) -> bool:
        return self.anchor is None

    def end(self, length: int) -> int:
        """Exclusive end position of the page within a list of ``length``."""

        if self.anchor is None:
            return 0
        return length if self.next is None else self.next

    def contains(self, position: int, length: int) -> bool:
        if self.anchor is None:
            return False
        return self.anchor <= position < self.end(length)


EMPTY_WINDOW = Window()


class Paginator:
    """Computes the page starting at an anchor plus the neighbouring anchors."""

    def __init__(
        self,
        layout: LayoutMode = LayoutMode.VERTICAL,
        *,
        lines: int = 0,
        budget: float = 0,
        cost: Optional[CostFunction] = None,
    ) -> None:
        if layout is LayoutMode.VERTICAL and lines <= 0:
            raise ValueError("vertical layout needs a positive line count")
        if layout is LayoutMode.HORIZONTAL:
            if budget <= 0:
                raise ValueError("horizontal layout needs a positive budget")
            if cost is None:
                raise ValueError("horizontal layout needs a cost function")
        self.layout = layout
        self.lines = lines
        self.budget = budget
        self.cost = cost

    @property
    def limit(self) -> float:
        return self.lines if self.layout is LayoutMode.VERTICAL else self.budget

    def item_cost(self, text: str) -> float:
        if self.layout is LayoutMode.VERTICAL:
            return 1
        return min(cast(CostFunction, self.cost)(text), self.budget)

    def calcoffsets(self, texts: Sequence[str], anchor: Optional[int]) -> Window:
        """Scan forward and backward from ``anchor`` within ``texts``.

        ``texts`` holds the display text of each match list entry in order.
        """

        if anchor is None or not texts:
            return EMPTY_WINDOW
        limit = self.limit

        total: float = 0
        following: Optional[int] = None
        for position in range(anchor, len(texts)):
            total += self.item_cost(texts[position])
            if total > limit:
                following = position
                break

        previous: Optional[int] = None
        if anchor > 0:
            total = 0
            previous = anchor
            while previous > 0:
                total += self.item_cost(texts[previous - 1])
                if total > limit:
                    break
                previous -= 1

        return Window(anchor=anchor, next=following, prev=previous)

    def visible(self, window: Window, length: int) -> range:
        if window.anchor is None:
            return range(0)
        return range(window.anchor, window.end(length))


__all__ = ["CostFunction", "EMPTY_WINDOW", "LayoutMode", "Paginator", "Window"]
