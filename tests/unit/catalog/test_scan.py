"""Tests for archive scanning: skip policy, masked title match, early stop."""

from __future__ import annotations

import unittest

from dlc_fixtures import OWNER_TITLE_ID, FakeArchiveReader, dlc_entry

from lazydlc.archive import ArchiveEntry
from lazydlc.archive.types import CONTENT_TYPE_CONTROL, CONTENT_TYPE_META
from lazydlc.catalog.scan import ScannedEntry, SkippedEntry, iter_scan_outcomes, scan_archive, select_title_entries
from lazydlc.catalog.types import EntryRecord
from lazydlc.errors import DECODE_CORRUPT, DECODE_MISSING_KEY, ArchiveOpenError, EntryDecodeError

OTHER_TITLE_ID = 0x0200000000000000


class ScanArchiveTests(unittest.TestCase):
    def test_matching_entries_stop_at_first_mismatch(self) -> None:
        reader = FakeArchiveReader(
            {
                "pack.nsp": [
                    dlc_entry("/first.nca", 0x010000000000E000),
                    dlc_entry("/second.nca", 0x010000000000E013),
                    dlc_entry("/other.nca", OTHER_TITLE_ID),
                    dlc_entry("/late.nca", 0x010000000000E001),
                ]
            }
        )

        entries = scan_archive(reader, "pack.nsp", OWNER_TITLE_ID)

        self.assertEqual(
            entries,
            [
                EntryRecord(path="/first.nca", title_id=0x010000000000E000, enabled=True),
                EntryRecord(path="/second.nca", title_id=0x010000000000E013, enabled=True),
            ],
        )
        self.assertTrue(reader.opened[0].closed)
        self.assertEqual(reader.patterns, ["*.nca"])

    def test_full_scan_skips_mismatch_and_keeps_later_matches(self) -> None:
        reader = FakeArchiveReader(
            {
                "pack.nsp": [
                    dlc_entry("/first.nca", 0x010000000000E000),
                    dlc_entry("/other.nca", OTHER_TITLE_ID),
                    dlc_entry("/late.nca", 0x010000000000E001),
                ]
            }
        )

        entries = scan_archive(reader, "pack.nsp", OWNER_TITLE_ID, full_scan=True)

        self.assertEqual([entry.path for entry in entries], ["/first.nca", "/late.nca"])

    def test_non_public_data_entries_are_skipped_without_stopping(self) -> None:
        reader = FakeArchiveReader(
            {
                "pack.nsp": [
                    dlc_entry("/meta.nca", OTHER_TITLE_ID, CONTENT_TYPE_META),
                    dlc_entry("/control.nca", 0x010000000000E001, CONTENT_TYPE_CONTROL),
                    dlc_entry("/dlc.nca", 0x010000000000E001),
                ]
            }
        )

        entries = scan_archive(reader, "pack.nsp", OWNER_TITLE_ID)

        self.assertEqual([entry.path for entry in entries], ["/dlc.nca"])

    def test_decode_failures_are_logged_and_scanning_continues(self) -> None:
        reader = FakeArchiveReader(
            {
                "pack.nsp": [
                    ArchiveEntry(path="/broken.nca", error=EntryDecodeError("/broken.nca", DECODE_CORRUPT, "bad header")),
                    ArchiveEntry(path="/locked.nca", error=EntryDecodeError("/locked.nca", DECODE_MISSING_KEY, "no key")),
                    dlc_entry("/dlc.nca", 0x010000000000E002),
                ]
            }
        )

        with self.assertLogs("lazydlc.catalog.scan", level="ERROR") as logs:
            entries = scan_archive(reader, "pack.nsp", OWNER_TITLE_ID)

        self.assertEqual([entry.path for entry in entries], ["/dlc.nca"])
        self.assertEqual(len(logs.records), 2)
        self.assertTrue(all("pack.nsp" in record.getMessage() for record in logs.records))

    def test_open_failure_propagates(self) -> None:
        reader = FakeArchiveReader()
        with self.assertRaises(ArchiveOpenError) as ctx:
            scan_archive(reader, "missing.nsp", OWNER_TITLE_ID)
        self.assertEqual(ctx.exception.path, "missing.nsp")

    def test_read_failure_is_reported_as_archive_error_and_handle_released(self) -> None:
        class ExplodingReader(FakeArchiveReader):
            def enumerate_entries(self, archive, pattern):
                raise OSError(5, "Input/output error")
                yield  # pragma: no cover

        reader = ExplodingReader({"pack.nsp": []})
        with self.assertRaises(ArchiveOpenError) as ctx:
            scan_archive(reader, "pack.nsp", OWNER_TITLE_ID)
        self.assertEqual(ctx.exception.path, "pack.nsp")
        self.assertIn("Input/output error", str(ctx.exception))
        self.assertTrue(reader.opened[0].closed)


class ScanOutcomeTests(unittest.TestCase):
    def test_outcomes_are_tagged_per_entry_in_archive_order(self) -> None:
        error = EntryDecodeError("/broken.nca", DECODE_CORRUPT, "bad header")
        reader = FakeArchiveReader(
            {
                "pack.nsp": [
                    dlc_entry("/a.nca", 0x010000000000E001),
                    ArchiveEntry(path="/broken.nca", error=error),
                ]
            }
        )
        with reader.open_for_read("pack.nsp") as archive:
            outcomes = list(iter_scan_outcomes(reader, archive))

        self.assertIsInstance(outcomes[0], ScannedEntry)
        self.assertEqual(outcomes[1], SkippedEntry(path="/broken.nca", error=error))

    def test_select_title_entries_matches_masked_id(self) -> None:
        outcomes = [
            ScannedEntry(path="/a.nca", header=dlc_entry("/a.nca", 0x010000000000FFFF).header),
            ScannedEntry(path="/b.nca", header=dlc_entry("/b.nca", 0x010000000001E000).header),
            ScannedEntry(path="/c.nca", header=dlc_entry("/c.nca", 0x010000000000E001).header),
        ]

        selected = select_title_entries(outcomes, OWNER_TITLE_ID, archive_path="pack.nsp")

        self.assertEqual([entry.path for entry in selected], ["/a.nca"])


if __name__ == "__main__":
    unittest.main()
