"""Helpers shared by every action module."""

from __future__ import annotations

from menu_engine.modes.base_mode import ModeResult


def outcome(changed: bool, status: str) -> ModeResult:
    """Actions always consume their key; ``noop`` marks a refused move."""

    return ModeResult(consumed=True, status=status if changed else "noop")


__all__ = ["outcome"]
