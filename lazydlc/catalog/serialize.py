"""Flatten an edited toggle tree back into persistable container records."""

from __future__ import annotations

from ..toggle_tree.tree import ToggleTree
from .types import ContainerRecord, EntryRecord


def flatten(tree: ToggleTree) -> list[ContainerRecord]:
    """Return containers and entries in display order.

    Containers without entries are not emitted. The result replaces the
    whole persisted catalog.
    """
    containers: list[ContainerRecord] = []
    for container in tree.containers():
        entries = [
            EntryRecord(path=entry.path, title_id=entry.title_id, enabled=entry.enabled)
            for entry in tree.children(container.node_id)
        ]
        if entries:
            containers.append(ContainerRecord(path=container.path, entries=entries))
    return containers


__all__ = ["flatten"]
