"""Tests for generated part-number prefixes."""

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PartCatalog.core.part_number import format_dim, format_gauge, part_number_prefix


class TestFormatting(unittest.TestCase):
    def test_format_gauge(self) -> None:
        self.assertEqual(format_gauge(".024"), "024")
        self.assertEqual(format_gauge("0.040"), "040")
        self.assertEqual(format_gauge(".1"), "100")
        self.assertEqual(format_gauge("abc"), "")
        self.assertEqual(format_gauge(None), "")

    def test_format_dim(self) -> None:
        self.assertEqual(format_dim("48"), "48")
        self.assertEqual(format_dim("12.50"), "12.5")
        self.assertEqual(format_dim(18.0), "18")
        self.assertEqual(format_dim(""), "")
        self.assertEqual(format_dim("nan"), "")


class TestPartNumberPrefix(unittest.TestCase):
    def test_sign_prefixes(self) -> None:
        self.assertEqual(part_number_prefix("aluminum_sign", "24", "18", gauge=".080"), "080x24x18")
        self.assertEqual(part_number_prefix("acm_sign", "24", "18"), "3mmx24x18")
        self.assertEqual(part_number_prefix("hdpe_sign", "12", "18"), "023x12x18")
        self.assertEqual(part_number_prefix("hdpe_sign", "12", "18", hdpe_sheet=".110"), "110x12x18")
        self.assertEqual(part_number_prefix("corrugated", "24", "18"), "24x18")

    def test_decal_prefixes(self) -> None:
        for part_type in ("magnet", "banner", "opus_cut_decal", "digital_print", "screenDecal"):
            with self.subTest(part_type=part_type):
                self.assertEqual(part_number_prefix(part_type, "12.5", "6"), "12.5x6")

    def test_bullet_uses_tube_length(self) -> None:
        self.assertEqual(part_number_prefix("bullet", tube_length="66"), "66")

    def test_missing_inputs_give_empty_prefix(self) -> None:
        self.assertEqual(part_number_prefix("acm_sign", "24", ""), "")
        self.assertEqual(part_number_prefix("aluminum_sign", "24", "18"), "")
        self.assertEqual(part_number_prefix("delta", "24", "18"), "")
        self.assertEqual(part_number_prefix("bullet"), "")


if __name__ == "__main__":
    unittest.main()
