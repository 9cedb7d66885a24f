"""End-to-end catalog round trip through real ``PFS0`` archives.

Loading, rebuilding and saving without edits must reproduce the persisted
document, apart from containers whose archive is no longer available.
"""

from __future__ import annotations

import json
import tempfile
import unittest
from pathlib import Path

from dlc_fixtures import OWNER_TITLE_ID, build_content_header, build_pfs0

from lazydlc.archive.types import CONTENT_TYPE_META
from lazydlc.session import DlcEditSession


class CatalogRoundTripTests(unittest.TestCase):
    def test_unedited_session_saves_equivalent_document(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            first = root / "first.nsp"
            first.write_bytes(
                build_pfs0(
                    [
                        ("meta.cnmt.nca", build_content_header(0x010000000000E800, CONTENT_TYPE_META)),
                        ("a.nca", build_content_header(0x010000000000E001)),
                        ("b.nca", build_content_header(0x010000000000E002)),
                    ]
                )
            )
            second = root / "second.nsp"
            second.write_bytes(build_pfs0([("c.nca", build_content_header(0x010000000000E003))]))
            document = [
                {
                    "path": str(first),
                    "dlcNcaList": [
                        {"path": "/a.nca", "titleId": 0x010000000000E001, "enabled": False},
                        {"path": "/b.nca", "titleId": 0x010000000000E002, "enabled": True},
                    ],
                },
                {
                    "path": str(second),
                    "dlcNcaList": [{"path": "/c.nca", "titleId": 0x010000000000E003, "enabled": False}],
                },
            ]
            catalog_path = root / "dlc.json"
            catalog_path.write_text(json.dumps(document), encoding="utf-8")

            session = DlcEditSession(OWNER_TITLE_ID, catalog_path)
            session.open()
            session.save()

            self.assertEqual(json.loads(catalog_path.read_text(encoding="utf-8")), document)

    def test_unavailable_archive_is_dropped_on_save(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            root = Path(tmp)
            present = root / "present.nsp"
            present.write_bytes(build_pfs0([("a.nca", build_content_header(0x010000000000E001))]))
            document = [
                {"path": str(root / "gone.nsp"), "dlcNcaList": [{"path": "/x.nca", "titleId": 0x010000000000E005, "enabled": True}]},
                {"path": str(present), "dlcNcaList": [{"path": "/a.nca", "titleId": 0x010000000000E001, "enabled": False}]},
            ]
            catalog_path = root / "dlc.json"
            catalog_path.write_text(json.dumps(document), encoding="utf-8")

            session = DlcEditSession(OWNER_TITLE_ID, catalog_path)
            with self.assertLogs("lazydlc.catalog.reconcile", level="WARNING"):
                session.open()
            session.save()

            self.assertEqual(json.loads(catalog_path.read_text(encoding="utf-8")), document[1:])


if __name__ == "__main__":
    unittest.main()
