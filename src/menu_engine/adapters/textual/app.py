"""Executable Textual app: read lines on stdin, print the chosen one."""

from __future__ import annotations

import argparse
import os
import sys
from dataclasses import dataclass
from typing import Any, Optional, Sequence

try:  # pragma: no cover - imported only when the app is run
    from rich.cells import cell_len
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use menu_engine.adapters.textual.app"
    ) from exc

from menu_engine.candidates import CandidateStore
from menu_engine.config import ConfigError, MenuConfig
from menu_engine.paging import LayoutMode
from menu_engine.runtime import telemetry
from menu_engine.session import EXIT_CANCELLED, MenuSession, MenuView

from .controller import TextualMenuAdapter, TextualUIHooks, create_prompt_mode

# Blank cells on each side of a horizontal item.
ITEM_PADDING = 1
PREV_MARKER = "<"
NEXT_MARKER = ">"

SELECTED_STYLE = "reverse bold"
MARKED_STYLE = "underline"


def item_cost(text: str) -> float:
    """Cell width of one horizontal item including its padding."""

    return cell_len(text) + 2 * ITEM_PADDING


def horizontal_budget(width: int, prompt: str, input_width: int) -> float:
    """Cells left for items once prompt, input field and markers are drawn."""

    used = input_width + cell_len(PREV_MARKER) + cell_len(NEXT_MARKER)
    if prompt:
        used += cell_len(prompt) + 2 * ITEM_PADDING
    return max(width - used, 1)


def input_width(store: CandidateStore, width: int) -> int:
    """Input field width: the widest item, capped at a third of the screen."""

    widest = store.widest(cell_len)
    widest_len = cell_len(widest.text) if widest else 0
    return max(min(widest_len, width // 3), 1)


@dataclass
class UIState:
    prompt_text: Text
    items_text: Text
    status_text: str = ""


def _query_text(view: MenuView, field_width: int = 0) -> Text:
    text = Text()
    if view.prompt:
        text.append(f" {view.prompt} ", style="bold")
    before = view.query[: view.cursor_column]
    after = view.query[view.cursor_column :]
    text.append(before)
    text.append(after[:1] or " ", style="reverse")
    text.append(after[1:])
    if field_width:
        used = cell_len(before) + cell_len(after) + 1
        text.append(" " * max(field_width - used, 0))
    return text


def _item_style(selected: bool, marked: bool) -> str:
    if selected:
        return SELECTED_STYLE
    return MARKED_STYLE if marked else ""


def render_vertical(view: MenuView) -> tuple[Text, Text]:
    items = Text()
    for index, item in enumerate(view.items):
        if index:
            items.append("\n")
        items.append(f" {item.text} ", style=_item_style(item.selected, item.marked))
    return _query_text(view), items


def render_horizontal(view: MenuView, field_width: int) -> tuple[Text, Text]:
    line = _query_text(view, field_width)
    line.append(PREV_MARKER if view.has_prev else " ")
    pad = " " * ITEM_PADDING
    for item in view.items:
        line.append(
            f"{pad}{item.text}{pad}", style=_item_style(item.selected, item.marked)
        )
    if view.has_next:
        line.append(NEXT_MARKER)
    return line, Text()


class MenuApp(App[int]):
    """Prompt line on top, matches below (or beside it on one line)."""

    ENABLE_COMMAND_PALETTE = False

    CSS = """
	Screen {
		layout: vertical;
	}

	#prompt-line {
		height: 1;
	}

	#items {
		height: auto;
	}

	#status-line {
		dock: bottom;
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    def __init__(
        self,
        store: CandidateStore,
        config: MenuConfig,
        *,
        show_status: bool = False,
    ) -> None:
        super().__init__()
        self.store = store
        self.config = config
        self.adapter: TextualMenuAdapter | None = None
        self._state = UIState(prompt_text=Text(), items_text=Text())
        self._field_width = 0
        self._clipboard = ""
        self._show_status = show_status
        self._prompt_widget: Static | None = None
        self._items_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._prompt_widget = Static("", id="prompt-line")
        self._items_widget = Static("", id="items")
        yield self._prompt_widget
        yield self._items_widget
        if self._show_status:
            self._status_widget = Static("", id="status-line")
            yield self._status_widget

    def on_mount(self) -> None:
        config = self.config
        if config.lines == 0:
            width = self.size.width
            self._field_width = input_width(self.store, width)
            config = config.with_budget(
                horizontal_budget(width, config.prompt, self._field_width)
            )
        session = MenuSession(
            self.store, config, cost=item_cost, emit=self._write_line
        )
        hooks = TextualUIHooks(
            render=self._render_view,
            update_status=self._update_status,
            handle_event=self._handle_event,
            log=self._log_line,
        )
        self.adapter = TextualMenuAdapter(create_prompt_mode(session), hooks)

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        self.adapter.handle_textual_key(event.key, character=event.character)
        event.stop()
        event.prevent_default()
        self._exit_if_finished()

    def on_paste(self, event: events.Paste) -> None:
        self._clipboard = event.text
        if self.adapter:
            self.adapter.handle_paste(event.text)
        event.stop()

    def _exit_if_finished(self) -> None:
        if self.adapter and self.adapter.finished:
            self.exit(self.adapter.exit_code)

    def _render_view(self, view: MenuView) -> None:
        if view.layout is LayoutMode.VERTICAL:
            prompt, items = render_vertical(view)
        else:
            prompt, items = render_horizontal(view, self._field_width)
        self._state.prompt_text = prompt
        self._state.items_text = items
        if self._prompt_widget:
            self._prompt_widget.update(prompt)
        if self._items_widget:
            self._items_widget.update(items)

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name == "menu.paste_request" and self.adapter:
            self.adapter.handle_paste(self._clipboard)
        elif name == "menu.exit":
            self._update_status(f"exit {payload}")

    def _log_line(self, line: str) -> None:
        telemetry.record_event(
            "adapter.log",
            level="debug",
            data={"line": line},
            logger_name="menu_engine.adapters.textual",
        )

    @staticmethod
    def _write_line(line: str) -> None:
        # The screen is drawn on stderr; stdout carries results only.
        sys.stdout.write(line + "\n")
        sys.stdout.flush()


# (flags, keyword arguments) for every command line option
OPTIONS: tuple[tuple[tuple[str, ...], dict[str, Any]], ...] = (
    (
        ("-l", "--lines"),
        {"type": int, "help": "list items vertically, with LINES rows"},
    ),
    (("-p", "--prompt"), {"help": "text shown left of the input field"}),
    (
        ("-i", "--ignore-case"),
        {"action": "store_true", "help": "match case-insensitively"},
    ),
    (
        ("-F", "--substring"),
        {
            "action": "store_true",
            "help": "substring matching instead of fuzzy matching",
        },
    ),
    (("--delimiters",), {"help": "characters separating words in the query"}),
    (
        ("--max-query-bytes",),
        {"type": int, "help": "capacity of the query in UTF-8 bytes"},
    ),
    (("--log-file",), {"help": "write telemetry to this file"}),
    (
        ("--status",),
        {"action": "store_true", "help": "show a status line with key results"},
    ),
)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="menu-engine",
        description="Read lines on stdin, let the user pick one, print it.",
    )
    for flags, kwargs in OPTIONS:
        parser.add_argument(*flags, **kwargs)
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> MenuConfig:
    """Command line options override ``MENU_ENGINE_*`` environment values."""

    overrides: dict[str, object] = {}
    if args.lines is not None:
        overrides["lines"] = args.lines
    if args.prompt is not None:
        overrides["prompt"] = args.prompt
    if args.ignore_case:
        overrides["case_sensitive"] = False
    if args.substring:
        overrides["policy"] = "substring"
    if args.delimiters is not None:
        overrides["word_delimiters"] = args.delimiters
    if args.max_query_bytes is not None:
        overrides["max_query_bytes"] = args.max_query_bytes
    return MenuConfig.from_env(**overrides)


def _attach_terminal() -> None:
    """Point stdin at the controlling terminal once the items are read."""

    tty = os.open("/dev/tty", os.O_RDONLY)
    os.dup2(tty, 0)
    os.close(tty)
    sys.stdin = open(0, closefd=False)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    telemetry.configure(preset="tui", log_file=args.log_file)
    try:
        config = build_config(args)
        store = CandidateStore.from_stream(sys.stdin.buffer)
    except ConfigError as exc:
        sys.stderr.write(f"menu-engine: {exc}\n")
        sys.exit(EXIT_CANCELLED)
    except MemoryError:
        sys.stderr.write("menu-engine: cannot load items: out of memory\n")
        sys.exit(EXIT_CANCELLED)

    try:
        _attach_terminal()
    except OSError as exc:
        sys.stderr.write(f"menu-engine: cannot open terminal: {exc}\n")
        sys.exit(EXIT_CANCELLED)

    app = MenuApp(store, config, show_status=args.status)
    code = app.run()
    sys.exit(EXIT_CANCELLED if code is None else code)


if __name__ == "__main__":  # pragma: no cover - manual entry point
    main()
