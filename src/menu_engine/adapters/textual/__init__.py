"""Textual adapter exports."""

from .controller import TextualMenuAdapter, TextualUIHooks, create_prompt_mode

__all__ = ["TextualMenuAdapter", "TextualUIHooks", "create_prompt_mode"]
