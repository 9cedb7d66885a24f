"""Merge freshly scanned DLC entries with persisted enable-state."""

from __future__ import annotations

import logging
from collections.abc import Callable

from ..errors import ArchiveOpenError
from .types import ContainerRecord, EntryRecord

logger = logging.getLogger(__name__)


def merge(fresh: list[EntryRecord], persisted: list[EntryRecord]) -> list[EntryRecord]:
    """Return ``fresh`` entries carrying the persisted ``enabled`` flag.

    Entries are matched on the full title id; the first persisted match wins.
    Unmatched fresh entries stay enabled, and persisted entries with no fresh
    counterpart are dropped.
    """
    saved_enabled: dict[int, bool] = {}
    for entry in persisted:
        saved_enabled.setdefault(entry.title_id, entry.enabled)
    return [
        EntryRecord(
            path=entry.path,
            title_id=entry.title_id,
            enabled=saved_enabled.get(entry.title_id, True),
        )
        for entry in fresh
    ]


def reconcile_catalog(
    containers: list[ContainerRecord],
    scan: Callable[[str], list[EntryRecord]],
) -> list[ContainerRecord]:
    """Rescan every persisted container and merge its saved preferences.

    An archive that cannot be opened keeps its place with no entries.
    """
    merged: list[ContainerRecord] = []
    for container in containers:
        try:
            fresh = scan(container.path)
        except ArchiveOpenError as exc:
            logger.warning("Skipping unavailable archive: %s", exc)
            fresh = []
        merged.append(ContainerRecord(path=container.path, entries=merge(fresh, container.entries)))
    return merged


__all__ = ["merge", "reconcile_catalog"]
