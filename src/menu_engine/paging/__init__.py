"""Windowing of match lists into display pages."""

from .paginator import CostFunction, EMPTY_WINDOW, LayoutMode, Paginator, Window

__all__ = ["CostFunction", "EMPTY_WINDOW", "LayoutMode", "Paginator", "Window"]
