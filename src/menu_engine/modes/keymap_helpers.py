"""Helper utilities for keymap-driven modes."""

from __future__ import annotations

from typing import Iterable, Optional

from menu_engine.keymaps.models import MODIFIERS, KeyStroke
from menu_engine.keymaps.resolver import KeymapResolver

from .base_mode import KeyInput, ModeContext

# Modifiers that turn a printable key into a command.
COMMAND_MODIFIERS = frozenset({"alt", "ctrl", "meta"})


def key_to_token(key: KeyInput) -> str:
    return KeyStroke(key.key, key.modifiers).token


def key_input_from_event(
    key: str, *, character: Optional[str] = None, modifiers: Iterable[str] = ()
) -> KeyInput:
    """Normalize a frontend key name such as ``ctrl+shift+left``.

    Leading modifier names are split off the key; a printable ``character``
    without command modifiers becomes literal text.
    """

    mods = [str(mod).lower() for mod in modifiers]
    parts = key.split("+")
    while len(parts) > 1 and parts[0].lower() in MODIFIERS:
        mods.append(parts.pop(0).lower())
    base = "+".join(parts) or key
    if (
        character
        and len(character) == 1
        and character.isprintable()
        and not COMMAND_MODIFIERS.intersection(mods)
    ):
        return KeyInput(key=character, modifiers=(), text=character)
    return KeyInput(key=base, modifiers=tuple(dict.fromkeys(mods)))


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


__all__ = [
    "COMMAND_MODIFIERS",
    "key_input_from_event",
    "key_to_token",
    "require_keymap_resolver",
]
