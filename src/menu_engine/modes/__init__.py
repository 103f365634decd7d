"""Key dispatch: the prompt mode and its shared types."""

from .base_mode import KeyInput, Mode, ModeBus, ModeContext, ModeResult
from .keymap_helpers import key_input_from_event, key_to_token
from .prompt_mode import PromptMode

__all__ = [
    "KeyInput",
    "Mode",
    "ModeBus",
    "ModeContext",
    "ModeResult",
    "PromptMode",
    "key_input_from_event",
    "key_to_token",
]
