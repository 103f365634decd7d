"""Key token resolution against the registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from menu_engine.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


class KeymapResolver:
    """Finds the action bound to a key token in a mode."""

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name

    @property
    def registry(self) -> KeymapRegistry:
        return self._registry

    def resolve(self, mode: str, token: str) -> Optional[ResolutionMatch]:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "key": token},
        ) as handle:
            binding = self._registry.lookup(mode, token)
            if binding is None:
                handle.add_metadata("status", "miss")
                return None
            handle.add_metadata("status", "match")
            handle.add_metadata("binding_id", binding.id)
            return ResolutionMatch(
                binding=binding, action=self._registry.get_action(binding.action_id)
            )


__all__ = ["KeymapResolver", "ResolutionMatch"]
