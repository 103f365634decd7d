"""Actions that edit the query or move its cursor."""

from __future__ import annotations

from menu_engine.modes.base_mode import ModeContext, ModeResult

from .core import outcome


def backspace(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.backspace().applied, "edit")


def delete_forward(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.delete_forward().applied, "edit")


def kill_to_end(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.kill_to_end().applied, "edit")


def kill_to_start(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.kill_to_start().applied, "edit")


def delete_word_left(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.delete_word_left().applied, "edit")


def word_left(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.move_word(-1), "cursor")


def word_right(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.move_word(+1), "cursor")


def complete(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.complete(), "complete")


def request_paste(context: ModeContext, match) -> ModeResult:
    """Ask the frontend for clipboard text; it answers through ``paste``."""

    del match
    context.bus.emit("menu.paste_request", None)
    return ModeResult(consumed=True, status="paste_request")


__all__ = [
    "backspace",
    "complete",
    "delete_forward",
    "delete_word_left",
    "kill_to_end",
    "kill_to_start",
    "request_paste",
    "word_left",
    "word_right",
]
