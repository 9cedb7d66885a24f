"""Content-archive access: entry datatypes and the bundled ``PFS0`` reader.

Any object with ``open_for_read(path)`` returning a context-managed handle and
``enumerate_entries(handle, pattern)`` yielding ``ArchiveEntry`` values can be
used wherever a reader is expected.
"""

from __future__ import annotations

from .pfs0 import (
    HeaderDecoder,
    PartitionArchive,
    PartitionArchiveReader,
    PartitionFileEntry,
    decode_plain_content_header,
    read_partition_table,
)
from .types import (
    CONTENT_ENTRY_PATTERN,
    CONTENT_TYPE_CONTROL,
    CONTENT_TYPE_DATA,
    CONTENT_TYPE_MANUAL,
    CONTENT_TYPE_META,
    CONTENT_TYPE_PROGRAM,
    CONTENT_TYPE_PUBLIC_DATA,
    ArchiveEntry,
    ContentHeader,
)

__all__ = [
    "ArchiveEntry",
    "ContentHeader",
    "CONTENT_ENTRY_PATTERN",
    "CONTENT_TYPE_PROGRAM",
    "CONTENT_TYPE_META",
    "CONTENT_TYPE_CONTROL",
    "CONTENT_TYPE_MANUAL",
    "CONTENT_TYPE_DATA",
    "CONTENT_TYPE_PUBLIC_DATA",
    "HeaderDecoder",
    "PartitionArchive",
    "PartitionArchiveReader",
    "PartitionFileEntry",
    "decode_plain_content_header",
    "read_partition_table",
]
