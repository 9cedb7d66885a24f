"""DLC catalog domain: records, persistence, scanning and reconciliation.

This package contains non-UI catalog primitives:
- container/entry record datatypes and title-id helpers
- JSON catalog load/save with the load-failure policy
- archive scanning for entries of one title
- merging scans with persisted enable-state
- flattening an edited toggle tree back into records
"""

from __future__ import annotations

from .types import (
    DLC_TITLE_ID_MASK,
    TITLE_ID_MAX,
    ContainerRecord,
    EntryRecord,
    format_title_id,
    masked_title_id,
    parse_title_id,
)
from .store import (
    CATALOG_FILENAME,
    catalog_path_for,
    decode_catalog,
    encode_catalog,
    load_catalog,
    load_catalog_or_empty,
    save_catalog,
)
from .scan import ScannedEntry, ScanOutcome, SkippedEntry, iter_scan_outcomes, scan_archive, select_title_entries
from .reconcile import merge, reconcile_catalog
from .serialize import flatten

__all__ = [
    "DLC_TITLE_ID_MASK",
    "TITLE_ID_MAX",
    "ContainerRecord",
    "EntryRecord",
    "format_title_id",
    "masked_title_id",
    "parse_title_id",
    "CATALOG_FILENAME",
    "catalog_path_for",
    "decode_catalog",
    "encode_catalog",
    "load_catalog",
    "load_catalog_or_empty",
    "save_catalog",
    "ScannedEntry",
    "SkippedEntry",
    "ScanOutcome",
    "iter_scan_outcomes",
    "select_title_entries",
    "scan_archive",
    "merge",
    "reconcile_catalog",
    "flatten",
]
