"""Session context bundling the query, matches, selection and window."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from menu_engine.buffer import BufferDelta, QueryBuffer
from menu_engine.candidates import Candidate, CandidateStore
from menu_engine.config import ConfigError, MenuConfig
from menu_engine.matching import MatchList, Matcher
from menu_engine.paging import CostFunction, LayoutMode, Paginator
from menu_engine.runtime import telemetry
from menu_engine.selection import SelectionController

EXIT_CONFIRMED = 0
EXIT_CANCELLED = 1


@dataclass(frozen=True, slots=True)
class ViewItem:
    text: str
    selected: bool
    marked: bool


@dataclass(frozen=True, slots=True)
class MenuView:
    """Everything a renderer needs to draw one frame."""

    prompt: str
    query: str
    cursor_column: int
    layout: LayoutMode
    items: Tuple[ViewItem, ...]
    has_prev: bool
    has_next: bool
    match_count: int
    total: int


def _noop_render(session: "MenuSession") -> None:  # pragma: no cover - default hook
    del session


class MenuSession:
    """One interactive selection session.

    Created with the loaded candidates and a fixed configuration; lives until
    ``exit_code`` is set by ``confirm`` or ``cancel``. Query edits rebuild the
    match list synchronously; navigation only moves the selection.
    """

    def __init__(
        self,
        store: CandidateStore,
        config: Optional[MenuConfig] = None,
        *,
        cost: Optional[CostFunction] = None,
        on_render: Optional[Callable[["MenuSession"], None]] = None,
        emit: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.config = config or MenuConfig(lines=10)
        self.store = store
        budget = self.config.require_budget()
        if self.config.layout is LayoutMode.HORIZONTAL and cost is None:
            raise ConfigError(
                "horizontal layout needs a cost function", option="cost"
            )
        self.paginator = Paginator(
            self.config.layout, lines=self.config.lines, budget=budget, cost=cost
        )
        self.matcher = Matcher.from_config(store, self.config)
        self.selection = SelectionController(store, self.paginator)
        self.buffer = QueryBuffer(
            capacity=self.config.max_query_bytes,
            delimiters=self.config.word_delimiters,
            on_change=self._on_query_change,
        )
        self.on_render = on_render or _noop_render
        self.emit = emit or _discard
        self.exit_code: Optional[int] = None
        self.rebuild()

    # -- state --------------------------------------------------------------

    @property
    def matches(self) -> MatchList:
        return self.selection.matches

    @property
    def finished(self) -> bool:
        return self.exit_code is not None

    @property
    def vertical(self) -> bool:
        return self.config.layout is LayoutMode.VERTICAL

    def current(self) -> Optional[Candidate]:
        return self.selection.current_candidate()

    def view(self) -> MenuView:
        snapshot = self.buffer.snapshot()
        matches = self.selection.matches
        current = self.selection.current
        items = tuple(
            ViewItem(
                text=self.store[matches[position]].text,
                selected=position == current,
                marked=self.store[matches[position]].marked,
            )
            for position in self.selection.visible()
        )
        window = self.selection.window
        return MenuView(
            prompt=self.config.prompt,
            query=snapshot.text,
            cursor_column=snapshot.column,
            layout=self.config.layout,
            items=items,
            has_prev=window.anchor is not None and window.anchor > 0,
            has_next=window.next is not None,
            match_count=len(matches),
            total=len(self.store),
        )

    # -- matching -----------------------------------------------------------

    def rebuild(self) -> MatchList:
        matches = self.matcher.rebuild(self.buffer.text)
        self.selection.reset(matches)
        self._render()
        return matches

    def _on_query_change(self, buffer: QueryBuffer) -> None:
        del buffer
        self.rebuild()

    # -- editing ------------------------------------------------------------

    def insert(self, text: str) -> BufferDelta:
        return self.buffer.insert(text)

    def paste(self, text: str) -> BufferDelta:
        return self.buffer.paste(text)

    def backspace(self) -> BufferDelta:
        return self.buffer.backspace()

    def delete_forward(self) -> BufferDelta:
        return self.buffer.delete_forward()

    def kill_to_end(self) -> BufferDelta:
        return self.buffer.kill_to_end()

    def kill_to_start(self) -> BufferDelta:
        return self.buffer.kill_to_start()

    def delete_word_left(self) -> BufferDelta:
        return self.buffer.delete_word_left()

    def clear(self) -> BufferDelta:
        return self.buffer.clear()

    def complete(self) -> bool:
        """Replace the query with the current selection's text."""

        candidate = self.current()
        if candidate is None:
            return False
        return self.buffer.set_text(candidate.text).applied

    # -- cursor -------------------------------------------------------------

    def move_cursor(self, direction: int) -> bool:
        return self._rendered(self.buffer.move_cursor(direction))

    def move_word(self, direction: int) -> bool:
        return self._rendered(self.buffer.move_word_edge(direction))

    def left(self) -> bool:
        """Cursor left, or select the previous item on a horizontal menu.

        The selection only moves when the cursor is already at the start of
        the query and a previous item exists.
        """

        has_previous = (
            self.selection.current is not None
            and self.matches.predecessor(self.selection.current) is not None
        )
        if not self.buffer.at_start and (not has_previous or self.vertical):
            return self.move_cursor(-1)
        if self.vertical:
            return False
        return self.select_previous()

    def right(self) -> bool:
        if not self.buffer.at_end:
            return self.move_cursor(+1)
        if self.vertical:
            return False
        return self.select_next()

    def home(self) -> bool:
        if self.selection.current is None or self.selection.at_head():
            return self._rendered(self.buffer.move_to_start())
        return self.jump_to_start()

    def end(self) -> bool:
        if not self.buffer.at_end:
            return self._rendered(self.buffer.move_to_end())
        return self.jump_to_end()

    # -- selection ----------------------------------------------------------

    def select_next(self) -> bool:
        return self._rendered(self.selection.move_next())

    def select_previous(self) -> bool:
        return self._rendered(self.selection.move_previous())

    def page_next(self) -> bool:
        return self._rendered(self.selection.page_next())

    def page_previous(self) -> bool:
        return self._rendered(self.selection.page_previous())

    def jump_to_start(self) -> bool:
        return self._rendered(self.selection.jump_to_start())

    def jump_to_end(self) -> bool:
        return self._rendered(self.selection.jump_to_end())

    # -- output -------------------------------------------------------------

    def confirm(self, *, use_query: bool = False, keep_open: bool = False) -> str:
        """Emit the selected text (or the raw query) as one output line.

        With ``keep_open`` the selected candidate is marked and the session
        continues; otherwise the session finishes with ``EXIT_CONFIRMED``.
        """

        candidate = self.current()
        if candidate is not None and not use_query:
            line = candidate.text
        else:
            line = self.buffer.text
        self.emit(line)
        telemetry.record_event(
            "session.confirm",
            data={
                "keep_open": keep_open,
                "use_query": use_query,
                "matched": candidate is not None,
            },
        )
        if keep_open:
            if candidate is not None:
                candidate.marked = True
            self._render()
        else:
            self._finish(EXIT_CONFIRMED)
        return line

    def cancel(self) -> None:
        self._finish(EXIT_CANCELLED)

    def _finish(self, code: int) -> None:
        self.exit_code = code
        telemetry.record_event("session.exit", data={"exit_code": code})

    def _rendered(self, changed: bool) -> bool:
        if changed:
            self._render()
        return changed

    def _render(self) -> None:
        self.on_render(self)


def _discard(line: str) -> None:
    del line


__all__ = [
    "EXIT_CANCELLED",
    "EXIT_CONFIRMED",
    "MenuSession",
    "MenuView",
    "ViewItem",
]
