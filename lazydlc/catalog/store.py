"""Persisted DLC catalog document: load, save, and load-failure policy.

The catalog is one JSON array per title. Field names (``path``,
``dlcNcaList``, ``titleId``, ``enabled``) are kept exactly as existing
documents spell them. The file is always read and written whole.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from ..config import load_games_dir
from ..errors import CatalogFormatError, CatalogIOError
from .types import TITLE_ID_MAX, ContainerRecord, EntryRecord

logger = logging.getLogger(__name__)

CATALOG_FILENAME = "dlc.json"


def catalog_path_for(title_id: int, games_dir: Path | None = None) -> Path:
    """Return ``<games_dir>/<title id in lowercase hex>/dlc.json``."""
    if games_dir is None:
        games_dir = load_games_dir()
    return games_dir / f"{title_id:016x}" / CATALOG_FILENAME


def _decode_entry(raw: object, index: int) -> EntryRecord:
    if not isinstance(raw, dict):
        raise CatalogFormatError(f"dlcNcaList item {index} is not an object")
    path = raw.get("path")
    title_id = raw.get("titleId")
    enabled = raw.get("enabled")
    if not isinstance(path, str):
        raise CatalogFormatError(f"dlcNcaList item {index} has no string 'path'")
    if isinstance(title_id, bool) or not isinstance(title_id, int) or not 0 <= title_id <= TITLE_ID_MAX:
        raise CatalogFormatError(f"dlcNcaList item {index} has invalid 'titleId'")
    if not isinstance(enabled, bool):
        raise CatalogFormatError(f"dlcNcaList item {index} has no boolean 'enabled'")
    return EntryRecord(path=path, title_id=title_id, enabled=enabled)


def decode_catalog(data: object) -> list[ContainerRecord]:
    """Convert a parsed JSON document into container records.

    Records whose ``dlcNcaList`` is absent or null are dropped: they are
    partially written or foreign and never reach the caller.
    """
    if not isinstance(data, list):
        raise CatalogFormatError("catalog document is not a JSON array")
    containers: list[ContainerRecord] = []
    for index, raw in enumerate(data):
        if not isinstance(raw, dict):
            raise CatalogFormatError(f"catalog item {index} is not an object")
        raw_entries = raw.get("dlcNcaList")
        if raw_entries is None:
            logger.debug("Dropping catalog item %d without dlcNcaList", index)
            continue
        path = raw.get("path")
        if not isinstance(path, str):
            raise CatalogFormatError(f"catalog item {index} has no string 'path'")
        if not isinstance(raw_entries, list):
            raise CatalogFormatError(f"catalog item {index} 'dlcNcaList' is not an array")
        entries = [_decode_entry(item, entry_index) for entry_index, item in enumerate(raw_entries)]
        containers.append(ContainerRecord(path=path, entries=entries))
    return containers


def encode_catalog(containers: list[ContainerRecord]) -> list[dict[str, object]]:
    """Convert container records into the persisted JSON shape."""
    return [
        {
            "path": container.path,
            "dlcNcaList": [
                {"path": entry.path, "titleId": entry.title_id, "enabled": entry.enabled}
                for entry in container.entries
            ],
        }
        for container in containers
    ]


def load_catalog(path: Path) -> list[ContainerRecord]:
    """Read the catalog at ``path``.

    Raises ``CatalogIOError`` when the file cannot be read and
    ``CatalogFormatError`` when it does not hold a valid catalog document.
    """
    try:
        with open(path, "r", encoding="utf-8") as fh:
            text = fh.read()
    except OSError as exc:
        raise CatalogIOError(f"cannot read catalog {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise CatalogFormatError(f"catalog {path} is not UTF-8 text") from exc
    try:
        data = json.loads(text)
    except ValueError as exc:
        raise CatalogFormatError(f"catalog {path} is not valid JSON: {exc}") from exc
    return decode_catalog(data)


def load_catalog_or_empty(path: Path, *, strict: bool = False) -> list[ContainerRecord]:
    """Load the catalog, treating any failure as "no catalog yet".

    A missing file is expected for titles never edited and is only logged at
    debug level. Other failures are logged as warnings, or propagate when
    ``strict`` is set.
    """
    try:
        return load_catalog(path)
    except (CatalogIOError, CatalogFormatError) as exc:
        if isinstance(exc, CatalogIOError) and not path.exists():
            logger.debug("No catalog at %s, starting empty", path)
            return []
        if strict:
            raise
        logger.warning("Ignoring unreadable catalog, starting empty: %s", exc)
        return []


def save_catalog(path: Path, containers: list[ContainerRecord]) -> None:
    """Atomically replace the catalog at ``path`` with ``containers``.

    Data is written to a sibling temp file, synced, then moved over the
    target. Raises ``CatalogIOError`` on any filesystem failure; the previous
    catalog is left untouched in that case.
    """
    payload = json.dumps(encode_catalog(containers), indent=2) + "\n"
    tmp_name: str | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as fh:
            tmp_name = fh.name
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(tmp_name, path)
        tmp_name = None
    except OSError as exc:
        raise CatalogIOError(f"cannot write catalog {path}: {exc}") from exc
    finally:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
    logger.debug("Saved %d containers to %s", len(containers), path)


__all__ = [
    "CATALOG_FILENAME",
    "catalog_path_for",
    "decode_catalog",
    "encode_catalog",
    "load_catalog",
    "load_catalog_or_empty",
    "save_catalog",
]
