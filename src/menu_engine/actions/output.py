"""Actions that print a result line or end the session."""

from __future__ import annotations

from menu_engine.modes.base_mode import ModeContext, ModeResult


def _confirm(
    context: ModeContext, *, use_query: bool = False, keep_open: bool = False
) -> ModeResult:
    session = context.session
    line = session.confirm(use_query=use_query, keep_open=keep_open)
    context.bus.emit("menu.output", line)
    if session.finished:
        context.bus.emit("menu.exit", session.exit_code)
        return ModeResult(consumed=True, status="confirm", message=line)
    return ModeResult(consumed=True, status="mark", message=line)


def confirm(context: ModeContext, match) -> ModeResult:
    del match
    return _confirm(context)


def confirm_query(context: ModeContext, match) -> ModeResult:
    del match
    return _confirm(context, use_query=True)


def confirm_keep_open(context: ModeContext, match) -> ModeResult:
    del match
    return _confirm(context, keep_open=True)


def confirm_query_keep_open(context: ModeContext, match) -> ModeResult:
    del match
    return _confirm(context, use_query=True, keep_open=True)


def cancel(context: ModeContext, match) -> ModeResult:
    del match
    context.session.cancel()
    context.bus.emit("menu.exit", context.session.exit_code)
    return ModeResult(consumed=True, status="cancel")


__all__ = [
    "cancel",
    "confirm",
    "confirm_keep_open",
    "confirm_query",
    "confirm_query_keep_open",
]
