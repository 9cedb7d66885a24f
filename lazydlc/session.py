"""DLC edit session: load, reconcile, edit, and save one title's catalog.

A session owns one ``ToggleTree``. ``open`` rebuilds it from the persisted
catalog and fresh archive scans, edits go through the tree's methods,
``save`` overwrites the catalog, and ``cancel`` drops the tree unsaved.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from .archive import PartitionArchiveReader
from .catalog.reconcile import reconcile_catalog
from .catalog.scan import scan_archive
from .catalog.serialize import flatten
from .catalog.store import load_catalog_or_empty, save_catalog
from .catalog.types import EntryRecord, format_title_id
from .errors import ArchiveOpenError, LazyDlcError, NoMatchError
from .toggle_tree import ToggleTree

logger = logging.getLogger(__name__)

CONTAINER_EXTENSION = ".nsp"


@dataclass
class AddReport:
    """Outcome of a batch add: imported container ids and per-archive failures."""

    added: list[int] = field(default_factory=list)
    failures: list[tuple[str, LazyDlcError]] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


class DlcEditSession:
    """Edit session for the DLC catalog of one base title."""

    def __init__(
        self,
        title_id: int,
        catalog_path: Path,
        reader: object | None = None,
        *,
        title_name: str | None = None,
        full_scan: bool = False,
        strict_load: bool = False,
    ) -> None:
        self.title_id = title_id
        self.catalog_path = catalog_path
        self.reader = reader if reader is not None else PartitionArchiveReader()
        self.title_name = title_name
        self.full_scan = full_scan
        self.strict_load = strict_load
        self.tree: ToggleTree | None = None

    @property
    def heading(self) -> str:
        name = self.title_name or "title"
        return f"DLC Available for {name} [{format_title_id(self.title_id)}]"

    def scan(self, archive_path: str) -> list[EntryRecord]:
        """Scan ``archive_path`` for this title's DLC entries."""
        return scan_archive(self.reader, archive_path, self.title_id, full_scan=self.full_scan)

    def open(self) -> ToggleTree:
        """Load the catalog, rescan its archives, and build a fresh tree."""
        persisted = load_catalog_or_empty(self.catalog_path, strict=self.strict_load)
        merged = reconcile_catalog(persisted, self.scan)
        self.tree = ToggleTree.build(merged)
        logger.info("Opened %s with %d containers", self.catalog_path, len(self.tree))
        return self.tree

    def _require_tree(self) -> ToggleTree:
        if self.tree is None:
            raise RuntimeError("edit session is not open")
        return self.tree

    def add_archives(self, paths: Iterable[str]) -> AddReport:
        """Scan and import each archive; failures are recorded per archive.

        Paths that are not existing ``.nsp`` files are skipped. An archive
        that cannot be opened or has no DLC for this title is reported in
        ``failures`` and does not stop the remaining archives.
        """
        tree = self._require_tree()
        report = AddReport()
        for raw_path in paths:
            path = Path(raw_path)
            if path.suffix.lower() != CONTAINER_EXTENSION or not path.is_file():
                logger.info("Skipping %s: not an existing %s file", raw_path, CONTAINER_EXTENSION)
                report.skipped.append(str(raw_path))
                continue
            try:
                entries = self.scan(str(raw_path))
                if not entries:
                    raise NoMatchError(str(raw_path))
            except (ArchiveOpenError, NoMatchError) as exc:
                logger.error("%s", exc)
                report.failures.append((str(raw_path), exc))
                continue
            report.added.append(tree.import_container(str(raw_path), entries))
        return report

    def save(self) -> None:
        """Overwrite the catalog with the current tree.

        ``CatalogIOError`` propagates; the tree is left as it was so the
        edit can be retried.
        """
        save_catalog(self.catalog_path, flatten(self._require_tree()))
        logger.info("Saved %s", self.catalog_path)

    def cancel(self) -> None:
        """Discard the tree and every unsaved edit."""
        self.tree = None


__all__ = ["CONTAINER_EXTENSION", "AddReport", "DlcEditSession"]
