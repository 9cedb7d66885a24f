"""Tests for title-id parsing, display formatting and masking."""

from __future__ import annotations

import unittest

from lazydlc.catalog.types import format_title_id, masked_title_id, parse_title_id


class TitleIdTests(unittest.TestCase):
    def test_format_is_sixteen_uppercase_hex_digits_without_prefix(self) -> None:
        self.assertEqual(format_title_id(0x010000000000E013), "010000000000E013")
        self.assertEqual(format_title_id(0x1), "0000000000000001")

    def test_parse_accepts_prefix_and_any_case(self) -> None:
        self.assertEqual(parse_title_id("010000000000e000"), 0x010000000000E000)
        self.assertEqual(parse_title_id("0x010000000000E000"), 0x010000000000E000)
        self.assertEqual(parse_title_id(" FFFFFFFFFFFFFFFF "), 0xFFFFFFFFFFFFFFFF)

    def test_parse_rejects_invalid_values(self) -> None:
        for text in ("", "0x", "xyz", "1_0", "-1", "10000000000000000"):
            with self.subTest(text=text):
                with self.assertRaises(ValueError):
                    parse_title_id(text)

    def test_mask_clears_content_unit_bits_only(self) -> None:
        self.assertEqual(masked_title_id(0x010000000000E013), 0x010000000000E000)
        self.assertEqual(masked_title_id(0x010000000000FFFF), 0x010000000000E000)
        self.assertEqual(masked_title_id(0x0200000000000000), 0x0200000000000000)


if __name__ == "__main__":
    unittest.main()
