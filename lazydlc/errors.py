"""Exception hierarchy shared by catalog, archive and session code."""

from __future__ import annotations

DECODE_CORRUPT = "corrupt"
DECODE_MISSING_KEY = "missing-key"


class LazyDlcError(Exception):
    """Base class for every error raised by lazydlc."""


class CatalogIOError(LazyDlcError):
    """Catalog document could not be opened, read, or written."""


class CatalogFormatError(LazyDlcError):
    """Catalog document is not the expected JSON structure."""


class ArchiveOpenError(LazyDlcError):
    """Content archive could not be opened or its file table is unreadable."""

    def __init__(self, path: str, message: str) -> None:
        super().__init__(f"{message}: {path}")
        self.path = path


class EntryDecodeError(LazyDlcError):
    """One content entry inside an archive could not be decoded.

    ``reason`` is ``DECODE_CORRUPT`` for malformed data and
    ``DECODE_MISSING_KEY`` when the header cannot be read without a key.
    """

    def __init__(self, entry_path: str, reason: str, message: str) -> None:
        super().__init__(message)
        self.entry_path = entry_path
        self.reason = reason


class NoMatchError(LazyDlcError):
    """Archive holds no DLC entries for the active title."""

    def __init__(self, path: str) -> None:
        super().__init__(f"The file {path} does not contain a DLC for the selected title!")
        self.path = path


__all__ = [
    "DECODE_CORRUPT",
    "DECODE_MISSING_KEY",
    "LazyDlcError",
    "CatalogIOError",
    "CatalogFormatError",
    "ArchiveOpenError",
    "EntryDecodeError",
    "NoMatchError",
]
