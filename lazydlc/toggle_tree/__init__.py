"""Toggle tree: containers with entry leaves, tri-state rollup, row formatting."""

from __future__ import annotations

from .rendering import format_checkbox, format_container_row, format_entry_row, format_tree_rows
from .tree import ToggleTree
from .types import ContainerNode, EntryNode, ToggleNode

__all__ = [
    "ToggleTree",
    "ContainerNode",
    "EntryNode",
    "ToggleNode",
    "format_checkbox",
    "format_container_row",
    "format_entry_row",
    "format_tree_rows",
]
