"""Formatting helpers for toggle-tree rows."""

from __future__ import annotations

from ..catalog.types import format_title_id
from ..ui_theme import DEFAULT_THEME, UITheme
from .tree import ToggleTree
from .types import ContainerNode, EntryNode

# Container rows leave the title-id column blank.
TITLE_ID_COLUMN_WIDTH = 16


def format_checkbox(enabled: bool, theme: UITheme | None = None) -> str:
    """Render ``[x]``/``[ ]`` in the theme's on/off color."""
    active_theme = theme or DEFAULT_THEME
    if enabled:
        return f"{active_theme.checkbox_on}[x]{active_theme.reset}"
    return f"{active_theme.checkbox_off}[ ]{active_theme.reset}"


def format_container_row(address: str, node: ContainerNode, theme: UITheme | None = None) -> str:
    """Render one container row: address, rollup checkbox, archive path."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    blank_title = " " * TITLE_ID_COLUMN_WIDTH
    return (
        f"{active_theme.address}{address:<6}{reset}"
        f"{format_checkbox(node.enabled, active_theme)} {blank_title}  "
        f"{active_theme.container_path}{node.path}{reset}"
    )


def format_entry_row(address: str, node: EntryNode, theme: UITheme | None = None) -> str:
    """Render one entry row: address, checkbox, 16-digit title id, entry path."""
    active_theme = theme or DEFAULT_THEME
    reset = active_theme.reset
    return (
        f"{active_theme.address}{address:<6}{reset}"
        f"{format_checkbox(node.enabled, active_theme)} "
        f"{active_theme.title_id}{format_title_id(node.title_id)}{reset}  "
        f"{active_theme.entry_path}{node.path}{reset}"
    )


def format_tree_rows(tree: ToggleTree, theme: UITheme | None = None) -> list[str]:
    """Render every container followed by its entries, in display order."""
    rows: list[str] = []
    for container_index, container in enumerate(tree.containers()):
        rows.append(format_container_row(str(container_index), container, theme))
        for entry_index, entry in enumerate(tree.children(container.node_id)):
            rows.append(format_entry_row(f"{container_index}.{entry_index}", entry, theme))
    return rows


__all__ = [
    "TITLE_ID_COLUMN_WIDTH",
    "format_checkbox",
    "format_container_row",
    "format_entry_row",
    "format_tree_rows",
]
