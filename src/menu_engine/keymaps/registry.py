"""Keymap registry responsible for storing actions and bindings."""

from __future__ import annotations

from typing import Dict, Optional

from menu_engine.runtime.telemetry import span

from .models import ActionRef, Binding


class KeymapConflictError(RuntimeError):
    """Raised when a binding claims a key already bound in the same mode."""

    def __init__(self, binding: Binding, existing: Binding) -> None:
        super().__init__(
            f"Binding '{binding.id}' conflicts with '{existing.id}' "
            f"on '{binding.token}' in mode '{binding.mode}'"
        )
        self.binding = binding
        self.existing = existing


class KeymapRegistry:
    """Owns action references and the one binding each key has per mode."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        # (mode, key token) -> binding id
        self._keys: Dict[tuple[str, str], str] = {}
        self._logger_name = logger_name

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def lookup(self, mode: str, token: str) -> Optional[Binding]:
        binding_id = self._keys.get((mode, token))
        if binding_id is None:
            return None
        return self._bindings[binding_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Bind ``binding.key`` in its mode.

        With ``replace`` a binding already holding the key, or the same id,
        is dropped first; otherwise either case is an error.
        """

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action "
                    f"'{binding.action_id}'"
                )

            existing = self.lookup(binding.mode, binding.token)
            if existing is not None and existing.id != binding.id and not replace:
                handle.add_metadata("conflict", existing.id)
                raise KeymapConflictError(binding, existing)
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            if existing is not None:
                self._drop(existing)
            if binding.id in self._bindings:
                self._drop(self._bindings[binding.id])
            self._bindings[binding.id] = binding
            self._keys[(binding.mode, binding.token)] = binding.id
            return binding

    def _drop(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        slot = (binding.mode, binding.token)
        if self._keys.get(slot) == binding.id:
            del self._keys[slot]


__all__ = ["KeymapConflictError", "KeymapRegistry"]
