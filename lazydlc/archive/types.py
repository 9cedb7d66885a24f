"""Archive entry datatypes exchanged between readers and the scanner."""

from __future__ import annotations

from dataclasses import dataclass

from ..errors import EntryDecodeError

CONTENT_TYPE_PROGRAM = 0
CONTENT_TYPE_META = 1
CONTENT_TYPE_CONTROL = 2
CONTENT_TYPE_MANUAL = 3
CONTENT_TYPE_DATA = 4
CONTENT_TYPE_PUBLIC_DATA = 5

CONTENT_ENTRY_PATTERN = "*.nca"


@dataclass(frozen=True)
class ContentHeader:
    """Decoded fields of a content entry header used for DLC matching."""

    content_type: int
    title_id: int


@dataclass(frozen=True)
class ArchiveEntry:
    """One enumerated archive entry: either a decoded header or a decode error."""

    path: str
    header: ContentHeader | None = None
    error: EntryDecodeError | None = None


__all__ = [
    "CONTENT_TYPE_PROGRAM",
    "CONTENT_TYPE_META",
    "CONTENT_TYPE_CONTROL",
    "CONTENT_TYPE_MANUAL",
    "CONTENT_TYPE_DATA",
    "CONTENT_TYPE_PUBLIC_DATA",
    "CONTENT_ENTRY_PATTERN",
    "ContentHeader",
    "ArchiveEntry",
]
