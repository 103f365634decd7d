"""Dataclasses describing key bindings and the actions they trigger."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

MODIFIERS = ("alt", "ctrl", "meta", "shift")


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


def normalize_key(key: str) -> str:
    """Named keys are case-insensitive; single characters keep their case."""

    return key if len(key) == 1 else key.lower()


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press, e.g. ``ctrl+a`` or ``pagedown``."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", normalize_key(self.key))
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @classmethod
    def parse(cls, text: str) -> "KeyStroke":
        """Parse ``"ctrl+shift+enter"`` style strings; ``"+"`` alone is a key."""

        if len(text) > 1 and text.endswith("++"):
            head, key = text[:-2], "+"
            mods = head.split("+") if head else []
        elif text != "+" and "+" in text:
            *mods, key = text.split("+")
        else:
            return cls(text)
        unknown = [mod for mod in mods if mod.lower() not in MODIFIERS]
        if unknown:
            raise ValueError(f"unknown modifier(s) {unknown} in '{text}'")
        return cls(key, tuple(mods))

    @property
    def token(self) -> str:
        if self.modifiers:
            return "+".join(self.modifiers) + f"+{self.key}"
        return self.key


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named callable invoked when a binding resolves."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Binds one key stroke to an action in a given mode."""

    id: str
    mode: str
    key: KeyStroke
    action_id: str
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.mode:
            raise ValueError("binding mode cannot be empty")
        if not self.action_id:
            raise ValueError("binding action_id cannot be empty")

    @property
    def token(self) -> str:
        return self.key.token


__all__ = [
    "MODIFIERS",
    "KeyStroke",
    "ActionRef",
    "Binding",
    "normalize_key",
]
