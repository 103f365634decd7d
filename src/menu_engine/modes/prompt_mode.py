"""The prompt mode: every key either runs a bound action or edits the query."""

from __future__ import annotations

from menu_engine.keymaps.resolver import ResolutionMatch
from menu_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import COMMAND_MODIFIERS, key_to_token, require_keymap_resolver


class PromptMode(Mode):
    name = "prompt"

    def __init__(self, context: ModeContext) -> None:
        super().__init__(context)
        self._resolver = require_keymap_resolver(context)

    def handle_key(self, key: KeyInput) -> ModeResult:
        if self.context.session.finished:
            return ModeResult(consumed=False, status="finished")

        match = self._resolver.resolve(self.name, key_to_token(key))
        if match is not None:
            return self._execute_match(match)

        if key.text and not COMMAND_MODIFIERS.intersection(key.modifiers):
            delta = self.context.session.insert(key.text)
            if not delta.applied:
                return ModeResult(
                    consumed=True, status="rejected", message="query_full"
                )
            return ModeResult(consumed=True, status="edit")

        return ModeResult(consumed=False, status="miss")

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = ["PromptMode"]
