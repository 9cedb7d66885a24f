"""Archive scanning: turn content entries into DLC entry records for one title.

Scanning runs in two steps. ``iter_scan_outcomes`` produces one tagged result
per content entry (``ScannedEntry`` or ``SkippedEntry``), and
``select_title_entries`` applies the skip, content-type, and title filters.

Entries are assumed to be grouped by owning title inside an archive, so by
default the first public-data entry of another title ends the scan. Full-scan
mode only skips such entries.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from ..archive.types import CONTENT_ENTRY_PATTERN, CONTENT_TYPE_PUBLIC_DATA, ContentHeader
from ..errors import DECODE_CORRUPT, DECODE_MISSING_KEY, ArchiveOpenError, EntryDecodeError
from .types import EntryRecord, format_title_id, masked_title_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScannedEntry:
    """Content entry whose header decoded successfully."""

    path: str
    header: ContentHeader


@dataclass(frozen=True)
class SkippedEntry:
    """Content entry that could not be decoded and is left out of the scan."""

    path: str
    error: EntryDecodeError


ScanOutcome = ScannedEntry | SkippedEntry


def iter_scan_outcomes(
    reader: object,
    archive: object,
    pattern: str = CONTENT_ENTRY_PATTERN,
) -> Iterator[ScanOutcome]:
    """Yield one tagged outcome per content entry of an open archive, in order."""
    for entry in reader.enumerate_entries(archive, pattern):
        if entry.error is not None or entry.header is None:
            error = entry.error or EntryDecodeError(entry.path, DECODE_CORRUPT, "entry has no header")
            yield SkippedEntry(path=entry.path, error=error)
        else:
            yield ScannedEntry(path=entry.path, header=entry.header)


def _log_skipped(outcome: SkippedEntry, archive_path: str) -> None:
    if outcome.error.reason == DECODE_MISSING_KEY:
        logger.error("Key set is missing a key for %s: %s. Errored file: %s", outcome.path, outcome.error, archive_path)
    else:
        logger.error("%s (%s). Errored file: %s", outcome.error, outcome.path, archive_path)


def select_title_entries(
    outcomes: Iterable[ScanOutcome],
    owner_title_id: int,
    *,
    archive_path: str,
    stop_at_mismatch: bool = True,
) -> list[EntryRecord]:
    """Keep public-data entries whose masked title id equals ``owner_title_id``.

    Skipped outcomes are logged with ``archive_path`` and do not interrupt the
    scan. A public-data entry for another title stops the scan when
    ``stop_at_mismatch`` is true; later matching entries are then not
    returned. Every emitted record starts out enabled.
    """
    selected: list[EntryRecord] = []
    for outcome in outcomes:
        if isinstance(outcome, SkippedEntry):
            _log_skipped(outcome, archive_path)
            continue
        header = outcome.header
        if header.content_type != CONTENT_TYPE_PUBLIC_DATA:
            continue
        if masked_title_id(header.title_id) != owner_title_id:
            if stop_at_mismatch:
                logger.debug(
                    "%s: entry %s belongs to %s, ending scan",
                    archive_path,
                    outcome.path,
                    format_title_id(header.title_id),
                )
                break
            continue
        selected.append(EntryRecord(path=outcome.path, title_id=header.title_id, enabled=True))
    return selected


def scan_archive(
    reader: object,
    archive_path: str,
    owner_title_id: int,
    *,
    full_scan: bool = False,
    pattern: str = CONTENT_ENTRY_PATTERN,
) -> list[EntryRecord]:
    """Scan one archive for DLC entries of ``owner_title_id``.

    ``ArchiveOpenError`` from the reader propagates and aborts this scan only;
    an ``OSError`` raised while reading is reported the same way. The archive
    handle is released on every exit path.
    """
    try:
        with reader.open_for_read(archive_path) as archive:
            entries = select_title_entries(
                iter_scan_outcomes(reader, archive, pattern),
                owner_title_id,
                archive_path=archive_path,
                stop_at_mismatch=not full_scan,
            )
    except OSError as exc:
        raise ArchiveOpenError(archive_path, f"cannot read archive ({exc.strerror or exc})") from exc
    logger.debug("%s: %d DLC entries for %s", archive_path, len(entries), format_title_id(owner_title_id))
    return entries


__all__ = [
    "ScannedEntry",
    "SkippedEntry",
    "ScanOutcome",
    "iter_scan_outcomes",
    "select_title_entries",
    "scan_archive",
]
