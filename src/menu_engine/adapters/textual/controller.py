"""Textual-facing adapter that wires the prompt mode into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from menu_engine.buffer import BufferDelta
from menu_engine.keymaps import KeymapRegistry, KeymapResolver
from menu_engine.keymaps.defaults import load_default_keymaps
from menu_engine.modes import (
    ModeBus,
    ModeContext,
    ModeResult,
    PromptMode,
    key_input_from_event,
)
from menu_engine.session import MenuSession, MenuView

BUS_EVENTS = ("menu.output", "menu.exit", "menu.paste_request")


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


def create_prompt_mode(
    session: MenuSession, *, registry: Optional[KeymapRegistry] = None
) -> PromptMode:
    """Build a prompt mode over ``session`` with the default keymap loaded."""

    if registry is None:
        registry = KeymapRegistry()
        load_default_keymaps(registry)
    context = ModeContext(
        session=session,
        bus=ModeBus(),
        extras={"keymap_resolver": KeymapResolver(registry)},
    )
    return PromptMode(context)


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    render: Callable[[MenuView], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional debug line sink
    log: Callable[[str], None] = _noop


class TextualMenuAdapter:
    """Bridges prompt-mode dispatch and bus events to a Textual surface.

    The adapter takes over the session's render hook, so every state change
    reaches ``hooks.render`` as a fresh ``MenuView``.
    """

    def __init__(self, mode: PromptMode, hooks: TextualUIHooks) -> None:
        self.mode = mode
        self.hooks = hooks
        self.session.on_render = self._on_render
        self._subscribe_events()
        self._refresh_view()

    @property
    def session(self) -> MenuSession:
        return self.mode.context.session

    @property
    def finished(self) -> bool:
        return self.session.finished

    @property
    def exit_code(self) -> Optional[int]:
        return self.session.exit_code

    def handle_textual_key(
        self,
        key: str,
        *,
        character: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        key_input = key_input_from_event(
            key, character=character, modifiers=modifiers
        )
        self._log_state(
            "key ->", key=key_input.key, text=key_input.text, mods=key_input.modifiers
        )
        result = self.mode.handle_key(key_input)
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
        )
        return result

    def handle_paste(self, text: str) -> BufferDelta:
        """Insert clipboard or bracketed-paste text; only its first line."""

        delta = self.session.paste(text)
        self.hooks.update_status("paste" if delta.applied else "query_full")
        return delta

    def _after_mode_result(self, result: ModeResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)

    def _subscribe_events(self) -> None:
        bus = self.mode.context.bus
        for event in BUS_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _on_render(self, session: MenuSession) -> None:
        del session
        self._refresh_view()

    def _refresh_view(self) -> None:
        self.hooks.render(self.session.view())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        session = self.session
        return {
            "query": session.buffer.text,
            "cursor": session.buffer.cursor,
            "selected": session.selection.current,
            "matches": len(session.matches),
        }


__all__ = ["TextualMenuAdapter", "TextualUIHooks", "create_prompt_mode"]
