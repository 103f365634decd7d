"""Actions that move the selection or the cursor across the menu."""

from __future__ import annotations

from menu_engine.modes.base_mode import ModeContext, ModeResult

from .core import outcome


def left(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.left(), "move")


def right(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.right(), "move")


def select_next(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.select_next(), "select")


def select_previous(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.select_previous(), "select")


def page_next(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.page_next(), "page")


def page_previous(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.page_previous(), "page")


def home(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.home(), "move")


def end(context: ModeContext, match) -> ModeResult:
    del match
    return outcome(context.session.end(), "move")


__all__ = [
    "end",
    "home",
    "left",
    "page_next",
    "page_previous",
    "right",
    "select_next",
    "select_previous",
]
