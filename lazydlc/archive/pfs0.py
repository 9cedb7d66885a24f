"""Partition-filesystem (``PFS0``) archive reader for ``.nsp`` containers.

Only the file table and the plaintext part of content headers are read.
Header decryption is not handled here: an entry whose header magic is not
visible is reported as a missing-key decode failure, and callers with key
material can inject their own ``header_decoder``.

Layout::

    0x00  "PFS0"
    0x04  u32 file count
    0x08  u32 string table size
    0x0C  u32 reserved
    0x10  file count * (u64 data offset, u64 size, u32 name offset, u32 reserved)
    ....  string table (NUL-terminated names)
    ....  file data (offsets are relative to here)
"""

from __future__ import annotations

import fnmatch
import logging
import os
import struct
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from typing import BinaryIO

from ..errors import DECODE_CORRUPT, DECODE_MISSING_KEY, ArchiveOpenError, EntryDecodeError
from .types import CONTENT_ENTRY_PATTERN, ArchiveEntry, ContentHeader

logger = logging.getLogger(__name__)

PFS0_MAGIC = b"PFS0"
PFS0_HEADER = struct.Struct("<4sIII")
PFS0_ENTRY = struct.Struct("<QQII")
PFS0_MAX_FILES = 0x10000

CONTENT_HEADER_READ_SIZE = 0x400
CONTENT_HEADER_MAGIC_OFFSET = 0x200
CONTENT_HEADER_MAGICS = (b"NCA3", b"NCA2", b"NCA0")
CONTENT_TYPE_OFFSET = 0x205
CONTENT_TITLE_ID = struct.Struct("<Q")
CONTENT_TITLE_ID_OFFSET = 0x210

HeaderDecoder = Callable[[str, bytes], ContentHeader]


@dataclass(frozen=True)
class PartitionFileEntry:
    """One file-table row with its absolute data offset in the archive."""

    name: str
    offset: int
    size: int


class PartitionArchive:
    """Open ``PFS0`` archive handle; closes its file when the context exits."""

    def __init__(self, path: str, fh: BinaryIO, files: list[PartitionFileEntry]) -> None:
        self.path = path
        self.files = files
        self._fh = fh

    def read(self, entry: PartitionFileEntry, size: int) -> bytes:
        """Read up to ``size`` bytes from the start of ``entry``."""
        self._fh.seek(entry.offset)
        return self._fh.read(min(size, entry.size))

    def close(self) -> None:
        self._fh.close()

    def __enter__(self) -> PartitionArchive:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def _read_exact(fh: BinaryIO, size: int, path: str) -> bytes:
    data = fh.read(size)
    if len(data) != size:
        raise ArchiveOpenError(path, "truncated partition file table")
    return data


def read_partition_table(fh: BinaryIO, path: str) -> list[PartitionFileEntry]:
    """Parse the ``PFS0`` header and file table from the start of ``fh``."""
    fh.seek(0, os.SEEK_END)
    archive_size = fh.tell()
    fh.seek(0)

    magic, file_count, string_table_size, _reserved = PFS0_HEADER.unpack(
        _read_exact(fh, PFS0_HEADER.size, path)
    )
    if magic != PFS0_MAGIC:
        raise ArchiveOpenError(path, "not a partition filesystem archive")
    if file_count > PFS0_MAX_FILES:
        raise ArchiveOpenError(path, f"implausible file count {file_count}")

    rows = [PFS0_ENTRY.unpack(_read_exact(fh, PFS0_ENTRY.size, path)) for _ in range(file_count)]
    string_table = _read_exact(fh, string_table_size, path)
    data_start = PFS0_HEADER.size + PFS0_ENTRY.size * file_count + string_table_size

    files: list[PartitionFileEntry] = []
    for data_offset, size, name_offset, _reserved in rows:
        if name_offset >= len(string_table):
            raise ArchiveOpenError(path, "file name outside string table")
        end = string_table.find(b"\0", name_offset)
        raw_name = string_table[name_offset:] if end < 0 else string_table[name_offset:end]
        try:
            name = raw_name.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ArchiveOpenError(path, "undecodable file name") from exc
        offset = data_start + data_offset
        if offset + size > archive_size:
            raise ArchiveOpenError(path, f"file {name!r} extends past end of archive")
        files.append(PartitionFileEntry(name=name, offset=offset, size=size))
    return files


def decode_plain_content_header(entry_path: str, data: bytes) -> ContentHeader:
    """Decode content type and title id from an unencrypted content header."""
    if len(data) < CONTENT_TITLE_ID_OFFSET + CONTENT_TITLE_ID.size:
        raise EntryDecodeError(entry_path, DECODE_CORRUPT, f"content header too short ({len(data)} bytes)")
    magic = data[CONTENT_HEADER_MAGIC_OFFSET:CONTENT_HEADER_MAGIC_OFFSET + 4]
    if magic not in CONTENT_HEADER_MAGICS:
        raise EntryDecodeError(entry_path, DECODE_MISSING_KEY, "content header is encrypted and no header key is available")
    (title_id,) = CONTENT_TITLE_ID.unpack_from(data, CONTENT_TITLE_ID_OFFSET)
    return ContentHeader(content_type=data[CONTENT_TYPE_OFFSET], title_id=title_id)


class PartitionArchiveReader:
    """Content archive reader for ``PFS0`` containers."""

    def __init__(self, header_decoder: HeaderDecoder | None = None) -> None:
        self.header_decoder = header_decoder or decode_plain_content_header

    def open_for_read(self, path: str) -> PartitionArchive:
        """Open ``path`` and parse its file table; raises ``ArchiveOpenError``."""
        try:
            fh = open(path, "rb")
        except OSError as exc:
            raise ArchiveOpenError(path, f"cannot open archive ({exc.strerror or exc})") from exc
        try:
            files = read_partition_table(fh, path)
        except ArchiveOpenError:
            fh.close()
            raise
        except OSError as exc:
            fh.close()
            raise ArchiveOpenError(path, f"cannot read archive ({exc.strerror or exc})") from exc
        logger.debug("Opened %s: %d files in partition table", path, len(files))
        return PartitionArchive(path, fh, files)

    def enumerate_entries(
        self,
        archive: PartitionArchive,
        pattern: str = CONTENT_ENTRY_PATTERN,
    ) -> Iterator[ArchiveEntry]:
        """Yield entries matching ``pattern`` in archive order with decoded headers.

        A failed read ends the enumeration with ``ArchiveOpenError``.
        """
        folded_pattern = pattern.lower()
        for file_entry in archive.files:
            if not fnmatch.fnmatchcase(file_entry.name.lower(), folded_pattern):
                continue
            entry_path = f"/{file_entry.name}"
            try:
                data = archive.read(file_entry, CONTENT_HEADER_READ_SIZE)
            except OSError as exc:
                raise ArchiveOpenError(archive.path, f"cannot read {entry_path} ({exc.strerror or exc})") from exc
            try:
                header = self.header_decoder(entry_path, data)
            except EntryDecodeError as exc:
                yield ArchiveEntry(path=entry_path, error=exc)
                continue
            yield ArchiveEntry(path=entry_path, header=header)


__all__ = [
    "PFS0_MAGIC",
    "HeaderDecoder",
    "PartitionFileEntry",
    "PartitionArchive",
    "PartitionArchiveReader",
    "read_partition_table",
    "decode_plain_content_header",
]
