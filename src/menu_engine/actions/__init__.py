"""Menu verbs bound to keys by the default keymap."""

from .core import outcome
from .editing import (
    backspace,
    complete,
    delete_forward,
    delete_word_left,
    kill_to_end,
    kill_to_start,
    request_paste,
    word_left,
    word_right,
)
from .navigation import (
    end,
    home,
    left,
    page_next,
    page_previous,
    right,
    select_next,
    select_previous,
)
from .output import (
    cancel,
    confirm,
    confirm_keep_open,
    confirm_query,
    confirm_query_keep_open,
)

__all__ = [
    "outcome",
    "backspace",
    "complete",
    "delete_forward",
    "delete_word_left",
    "kill_to_end",
    "kill_to_start",
    "request_paste",
    "word_left",
    "word_right",
    "end",
    "home",
    "left",
    "page_next",
    "page_previous",
    "right",
    "select_next",
    "select_previous",
    "cancel",
    "confirm",
    "confirm_keep_open",
    "confirm_query",
    "confirm_query_keep_open",
]
