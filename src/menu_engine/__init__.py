"""Interactive line filtering and selection engine."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "candidates",
    "config",
    "keymaps",
    "matching",
    "modes",
    "paging",
    "runtime",
    "selection",
    "session",
]

__version__ = "0.1.0"
