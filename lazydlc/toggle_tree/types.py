"""Toggle-tree node datatypes."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ContainerNode:
    """Container row; ``enabled`` is a rollup of its children, never authoritative."""

    node_id: int
    path: str
    enabled: bool = False
    children: list[int] = field(default_factory=list)


@dataclass
class EntryNode:
    """Entry leaf; ``parent`` is the owning container's node id."""

    node_id: int
    path: str
    title_id: int
    enabled: bool
    parent: int


ToggleNode = ContainerNode | EntryNode


__all__ = ["ContainerNode", "EntryNode", "ToggleNode"]
