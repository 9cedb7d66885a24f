"""In-memory container/entry toggle tree with tri-state rollup.

Nodes live in an arena list and are addressed by integer id. Removed slots
become ``None`` so ids stay stable for the whole edit session. Entries refer
to their container only through ``EntryNode.parent``.

Invariant after every mutation: a container's ``enabled`` equals the AND of
its children's flags, or ``False`` when it has no children.
"""

from __future__ import annotations

from collections.abc import Iterable

from ..catalog.types import ContainerRecord, EntryRecord
from .types import ContainerNode, EntryNode, ToggleNode


class ToggleTree:
    """Two-level tree of container nodes owning entry leaves."""

    def __init__(self) -> None:
        self._nodes: list[ToggleNode | None] = []
        self._container_ids: list[int] = []

    @classmethod
    def build(cls, containers: Iterable[ContainerRecord]) -> ToggleTree:
        """Build a tree with one container node per record, entries in record order."""
        tree = cls()
        for record in containers:
            container = tree._append_container(record.path)
            for entry in record.entries:
                tree._append_entry(container, entry.path, entry.title_id, entry.enabled)
            tree._refresh_rollup(container)
        return tree

    def __len__(self) -> int:
        return len(self._container_ids)

    def _append_container(self, path: str) -> ContainerNode:
        node = ContainerNode(node_id=len(self._nodes), path=path)
        self._nodes.append(node)
        self._container_ids.append(node.node_id)
        return node

    def _append_entry(self, container: ContainerNode, path: str, title_id: int, enabled: bool) -> EntryNode:
        node = EntryNode(
            node_id=len(self._nodes),
            path=path,
            title_id=title_id,
            enabled=enabled,
            parent=container.node_id,
        )
        self._nodes.append(node)
        container.children.append(node.node_id)
        return node

    def node(self, node_id: int) -> ToggleNode:
        """Return the live node for ``node_id``; raises ``KeyError`` when absent."""
        if node_id < 0 or node_id >= len(self._nodes) or self._nodes[node_id] is None:
            raise KeyError(node_id)
        return self._nodes[node_id]

    def _container(self, node_id: int) -> ContainerNode:
        node = self.node(node_id)
        if not isinstance(node, ContainerNode):
            raise TypeError(f"node {node_id} is not a container")
        return node

    def _entry(self, node_id: int) -> EntryNode:
        node = self.node(node_id)
        if not isinstance(node, EntryNode):
            raise TypeError(f"node {node_id} is not an entry")
        return node

    def containers(self) -> list[ContainerNode]:
        """Return container nodes in display order."""
        return [self._nodes[node_id] for node_id in self._container_ids]

    def children(self, container_id: int) -> list[EntryNode]:
        """Return entry nodes of ``container_id`` in display order."""
        return [self._nodes[child_id] for child_id in self._container(container_id).children]

    def rollup(self, container_id: int) -> bool:
        """Compute the AND of the container's children; ``False`` when childless."""
        children = self.children(container_id)
        return bool(children) and all(child.enabled for child in children)

    def _refresh_rollup(self, container: ContainerNode) -> None:
        container.enabled = self.rollup(container.node_id)

    def resolve_address(self, address: str) -> int:
        """Map a display address (``"2"`` container, ``"2.0"`` entry) to a node id."""
        parts = address.strip().split(".")
        if len(parts) > 2 or not all(part.isdigit() for part in parts):
            raise KeyError(address)
        container_index = int(parts[0])
        if container_index >= len(self._container_ids):
            raise KeyError(address)
        container_id = self._container_ids[container_index]
        if len(parts) == 1:
            return container_id
        children = self._nodes[container_id].children
        entry_index = int(parts[1])
        if entry_index >= len(children):
            raise KeyError(address)
        return children[entry_index]

    def toggle_entry(self, node_id: int) -> bool:
        """Flip one entry and refresh only its container's rollup.

        Returns the entry's new flag.
        """
        entry = self._entry(node_id)
        entry.enabled = not entry.enabled
        self._refresh_rollup(self._container(entry.parent))
        return entry.enabled

    def toggle_container(self, node_id: int) -> bool:
        """Flip a container and set every child to the new value.

        Returns the container's resulting flag, which stays ``False`` for a
        container without children.
        """
        container = self._container(node_id)
        new_value = not container.enabled
        for child in self.children(node_id):
            child.enabled = new_value
        self._refresh_rollup(container)
        return container.enabled

    def toggle(self, node_id: int) -> bool:
        """Toggle ``node_id`` as an entry or as a container, by node kind."""
        if isinstance(self.node(node_id), ContainerNode):
            return self.toggle_container(node_id)
        return self.toggle_entry(node_id)

    def remove_entry(self, node_id: int) -> None:
        """Remove an entry; removing a container's last entry removes the container."""
        entry = self._entry(node_id)
        container = self._container(entry.parent)
        if len(container.children) <= 1:
            self.remove_container(container.node_id)
            return
        container.children.remove(node_id)
        self._nodes[node_id] = None
        self._refresh_rollup(container)

    def remove_container(self, node_id: int) -> None:
        """Remove a container together with all of its entries."""
        container = self._container(node_id)
        for child_id in container.children:
            self._nodes[child_id] = None
        self._nodes[node_id] = None
        self._container_ids.remove(node_id)

    def remove(self, node_id: int) -> None:
        """Remove ``node_id`` as an entry or as a container, by node kind."""
        if isinstance(self.node(node_id), ContainerNode):
            self.remove_container(node_id)
        else:
            self.remove_entry(node_id)

    def remove_all(self) -> None:
        """Clear every container and entry."""
        self._nodes = [None] * len(self._nodes)
        self._container_ids = []

    def import_container(self, path: str, entries: Iterable[EntryRecord]) -> int:
        """Append a fully enabled container for ``path`` and return its node id.

        Imported entries are enabled regardless of their incoming flag. Raises
        ``ValueError`` when ``entries`` is empty.
        """
        records = list(entries)
        if not records:
            raise ValueError(f"no entries to import for {path}")
        container = self._append_container(path)
        for record in records:
            self._append_entry(container, record.path, record.title_id, True)
        container.enabled = True
        return container.node_id


__all__ = ["ToggleTree"]
