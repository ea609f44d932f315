"""Utility functions for pagetoc package."""

from .format import (
    visible_items,
    overrides_from_items,
    format_toc_item,
    format_toc_result,
)

__all__ = [
    "visible_items",
    "overrides_from_items",
    "format_toc_item",
    "format_toc_result",
]
