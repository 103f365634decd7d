"""Built-in keymap reproducing the classic dmenu key bindings."""

from __future__ import annotations

from menu_engine.actions import editing as editing_actions
from menu_engine.actions import navigation as navigation_actions
from menu_engine.actions import output as output_actions

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapRegistry

PROMPT_MODE = "prompt"

DEFAULT_ACTIONS: tuple[ActionRef, ...] = (
    ActionRef(
        id="edit.backspace",
        handler=editing_actions.backspace,
        description="Delete the code point left of the cursor",
    ),
    ActionRef(
        id="edit.delete_forward",
        handler=editing_actions.delete_forward,
        description="Delete the code point right of the cursor",
    ),
    ActionRef(
        id="edit.kill_to_end",
        handler=editing_actions.kill_to_end,
        description="Delete from the cursor to the end of the query",
    ),
    ActionRef(
        id="edit.kill_to_start",
        handler=editing_actions.kill_to_start,
        description="Delete from the start of the query to the cursor",
    ),
    ActionRef(
        id="edit.delete_word_left",
        handler=editing_actions.delete_word_left,
        description="Delete the word left of the cursor",
    ),
    ActionRef(
        id="edit.word_left",
        handler=editing_actions.word_left,
        description="Move the cursor to the previous word start",
    ),
    ActionRef(
        id="edit.word_right",
        handler=editing_actions.word_right,
        description="Move the cursor past the next word",
    ),
    ActionRef(
        id="edit.complete",
        handler=editing_actions.complete,
        description="Replace the query with the selected item",
    ),
    ActionRef(
        id="edit.paste",
        handler=editing_actions.request_paste,
        description="Insert clipboard text at the cursor",
    ),
    ActionRef(
        id="nav.left",
        handler=navigation_actions.left,
        description="Cursor left, or previous item on a horizontal menu",
    ),
    ActionRef(
        id="nav.right",
        handler=navigation_actions.right,
        description="Cursor right, or next item on a horizontal menu",
    ),
    ActionRef(
        id="nav.select_previous",
        handler=navigation_actions.select_previous,
        description="Select the previous item",
    ),
    ActionRef(
        id="nav.select_next",
        handler=navigation_actions.select_next,
        description="Select the next item",
    ),
    ActionRef(
        id="nav.page_previous",
        handler=navigation_actions.page_previous,
        description="Show the previous page",
    ),
    ActionRef(
        id="nav.page_next",
        handler=navigation_actions.page_next,
        description="Show the next page",
    ),
    ActionRef(
        id="nav.home",
        handler=navigation_actions.home,
        description="Select the first item, then move the cursor to the start",
    ),
    ActionRef(
        id="nav.end",
        handler=navigation_actions.end,
        description="Move the cursor to the end, then select the last item",
    ),
    ActionRef(
        id="output.confirm",
        handler=output_actions.confirm,
        description="Print the selected item and exit",
    ),
    ActionRef(
        id="output.confirm_query",
        handler=output_actions.confirm_query,
        description="Print the query as typed and exit",
    ),
    ActionRef(
        id="output.confirm_keep_open",
        handler=output_actions.confirm_keep_open,
        description="Print and mark the selected item without exiting",
    ),
    ActionRef(
        id="output.confirm_query_keep_open",
        handler=output_actions.confirm_query_keep_open,
        description="Print the query as typed without exiting",
    ),
    ActionRef(
        id="output.cancel",
        handler=output_actions.cancel,
        description="Exit without output",
    ),
)

# action id -> keys bound to it in prompt mode
_DEFAULT_KEYS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("edit.backspace", ("backspace", "ctrl+h")),
    ("edit.delete_forward", ("delete", "ctrl+d")),
    ("edit.kill_to_end", ("ctrl+k",)),
    ("edit.kill_to_start", ("ctrl+u",)),
    ("edit.delete_word_left", ("ctrl+w", "ctrl+backspace")),
    ("edit.word_left", ("ctrl+left", "alt+b")),
    ("edit.word_right", ("ctrl+right", "alt+f")),
    ("edit.complete", ("tab", "ctrl+i")),
    ("edit.paste", ("ctrl+y",)),
    ("nav.left", ("left", "ctrl+b")),
    ("nav.right", ("right", "ctrl+f")),
    ("nav.select_previous", ("up", "ctrl+p", "alt+h")),
    ("nav.select_next", ("down", "ctrl+n", "alt+l")),
    ("nav.page_previous", ("pageup", "alt+k")),
    ("nav.page_next", ("pagedown", "alt+j")),
    ("nav.home", ("home", "ctrl+a", "alt+g")),
    ("nav.end", ("end", "ctrl+e", "alt+G", "alt+shift+g")),
    ("output.confirm", ("enter", "ctrl+j", "ctrl+m")),
    # Most terminals send Shift/Ctrl+Enter as plain Enter; the letter chords
    # keep these reachable.
    ("output.confirm_query", ("shift+enter", "alt+enter", "ctrl+x")),
    ("output.confirm_keep_open", ("ctrl+enter", "ctrl+o")),
    ("output.confirm_query_keep_open", ("ctrl+shift+enter", "ctrl+t")),
    ("output.cancel", ("escape", "ctrl+c", "ctrl+g", "ctrl+left_square_bracket")),
)


def _build_default_bindings() -> tuple[Binding, ...]:
    descriptions = {action.id: action.description for action in DEFAULT_ACTIONS}
    bindings = []
    for action_id, keys in _DEFAULT_KEYS:
        for key in keys:
            bindings.append(
                Binding(
                    id=f"{PROMPT_MODE}.{action_id}.{key}",
                    mode=PROMPT_MODE,
                    key=KeyStroke.parse(key),
                    action_id=action_id,
                    description=descriptions[action_id],
                )
            )
    return tuple(bindings)


DEFAULT_BINDINGS: tuple[Binding, ...] = _build_default_bindings()


def load_default_keymaps(registry: KeymapRegistry) -> None:
    """Register built-in actions and bindings for the prompt mode."""

    for action in DEFAULT_ACTIONS:
        registry.register_action(action)
    for binding in DEFAULT_BINDINGS:
        registry.register_binding(binding)


__all__ = [
    "DEFAULT_ACTIONS",
    "DEFAULT_BINDINGS",
    "PROMPT_MODE",
    "load_default_keymaps",
]
