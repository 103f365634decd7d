"""Declarative keymap registry and resolver.

Default bindings live in :mod:`menu_engine.keymaps.defaults`, which pulls in
the action modules.
"""

from .models import ActionRef, Binding, KeyStroke
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ResolutionMatch

__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "KeymapRegistry",
    "KeymapConflictError",
    "KeymapResolver",
    "ResolutionMatch",
]
