"""Tests for layered config parsing and validation."""

import os
import sys
import unittest
from pathlib import Path
from unittest.mock import patch

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PartCatalog.config import load_config, parse_config_dict
from PartCatalog.config.store import DB_PATH_ENV


def _base_raw_config() -> dict:
    return {
        "log": {"level": "INFO", "to_file": True, "dir": "log"},
        "store": {"db_path": "database/parts.db", "require_indexes": False},
        "search": {"target_count": 50, "chunk_size": 25, "max_chunks_per_call": 4},
        "output": {"base_dir": "output", "formats": ["console"]},
        "part_types": {
            "hdpe_sign": {
                "server_filters": [
                    {"field": "Part Group", "op": "=", "value": "Signs"},
                    {"field": "Grade", "op": "=", "value": "HDPE"},
                ],
                "client_filter": {"field": "Part Type", "values": ["Small Signs", "Large Signs"]},
            },
            "delta": {
                "server_filters": [{"field": "Part Group", "op": "==", "value": "Deltas"}],
            },
        },
    }


class TestConfigLayering(unittest.TestCase):
    def test_parse_success_nested_access(self) -> None:
        with patch.dict(os.environ, {DB_PATH_ENV: ""}):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.log.level, "INFO")
        self.assertEqual(cfg.store.db_path, "database/parts.db")
        self.assertEqual(cfg.search.target_count, 50)
        self.assertEqual(cfg.search.chunk_size, 25)
        self.assertEqual(cfg.search.max_chunks_per_call, 4)
        hdpe = cfg.part_types["hdpe_sign"]
        self.assertEqual(hdpe.server_filters[1].field, "Grade")
        self.assertEqual(hdpe.client_filter_field, "Part Type")
        self.assertEqual(hdpe.client_filter_values, ("Small Signs", "Large Signs"))

    def test_double_equals_normalized(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.part_types["delta"].server_filters[0].op, "=")
        self.assertIsNone(cfg.part_types["delta"].client_filter_field)

    def test_optional_sections_get_defaults(self) -> None:
        raw = _base_raw_config()
        del raw["search"]
        del raw["output"]
        cfg = parse_config_dict(raw)
        self.assertEqual(cfg.search.target_count, 100)
        self.assertEqual(cfg.search.chunk_size, 100)
        self.assertEqual(cfg.search.max_chunks_per_call, 10)
        self.assertEqual(cfg.output.formats, ("console",))
        self.assertEqual(cfg.importer.default_type, "misc")

    def test_part_types_are_read_only(self) -> None:
        cfg = parse_config_dict(_base_raw_config())
        with self.assertRaises(TypeError):
            cfg.part_types["new"] = cfg.part_types["delta"]  # type: ignore[index]

    def test_env_overrides_db_path(self) -> None:
        with patch.dict(os.environ, {DB_PATH_ENV: "/tmp/other.db"}):
            cfg = parse_config_dict(_base_raw_config())
        self.assertEqual(cfg.store.db_path, "/tmp/other.db")

    def test_output_unknown_format_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["output"]["formats"] = ["console", "unknown"]
        with self.assertRaisesRegex(ValueError, "output\\.formats"):
            parse_config_dict(raw)

    def test_unknown_operator_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["part_types"]["hdpe_sign"]["server_filters"][1]["op"] = "!="
        with self.assertRaisesRegex(ValueError, "part_types\\.hdpe_sign\\.server_filters\\[1\\]\\.op"):
            parse_config_dict(raw)

    def test_filter_value_type_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["part_types"]["delta"]["server_filters"][0]["value"] = ["Deltas"]
        with self.assertRaisesRegex(TypeError, "part_types\\.delta\\.server_filters\\[0\\]\\.value"):
            parse_config_dict(raw)

    def test_missing_filter_field_error(self) -> None:
        raw = _base_raw_config()
        del raw["part_types"]["delta"]["server_filters"][0]["field"]
        with self.assertRaisesRegex(ValueError, "part_types\\.delta\\.server_filters\\[0\\]\\.field"):
            parse_config_dict(raw)

    def test_quoted_field_name_rejected(self) -> None:
        raw = _base_raw_config()
        raw["part_types"]["delta"]["server_filters"][0]["field"] = 'Part "Group"'
        with self.assertRaisesRegex(ValueError, "part_types\\.delta\\.server_filters\\[0\\]\\.field"):
            parse_config_dict(raw)

    def test_empty_client_values_error(self) -> None:
        raw = _base_raw_config()
        raw["part_types"]["hdpe_sign"]["client_filter"]["values"] = []
        with self.assertRaisesRegex(ValueError, "part_types\\.hdpe_sign\\.client_filter\\.values"):
            parse_config_dict(raw)

    def test_part_types_empty_error(self) -> None:
        raw = _base_raw_config()
        raw["part_types"] = {}
        with self.assertRaisesRegex(ValueError, "part_types"):
            parse_config_dict(raw)

    def test_chunk_size_type_error_contains_key(self) -> None:
        raw = _base_raw_config()
        raw["search"]["chunk_size"] = "25"
        with self.assertRaisesRegex(TypeError, "search\\.chunk_size"):
            parse_config_dict(raw)

    def test_non_positive_target_count(self) -> None:
        raw = _base_raw_config()
        raw["search"]["target_count"] = 0
        with self.assertRaisesRegex(ValueError, "search\\.target_count"):
            parse_config_dict(raw)

    def test_log_level_validated(self) -> None:
        raw = _base_raw_config()
        raw["log"]["level"] = "verbose"
        with self.assertRaisesRegex(ValueError, "log\\.level"):
            parse_config_dict(raw)


class TestShippedDefaults(unittest.TestCase):
    def test_default_config_loads(self) -> None:
        cfg = load_config(REPO_ROOT / "config" / "default.yml")
        expected = {
            "hdpe_sign", "acm_sign", "aluminum_sign", "corrugated", "magnet", "opus_cut_decal",
            "banner", "digital_print", "screenDecal", "delta", "bullet", "drv",
        }
        self.assertEqual(set(cfg.part_types), expected)

    def test_acm_range_covers_3mm_prefix(self) -> None:
        cfg = load_config(REPO_ROOT / "config" / "default.yml")
        filters = cfg.part_types["acm_sign"].server_filters
        ranges = [(f.op, f.value) for f in filters if f.field == "Name"]
        self.assertEqual(ranges, [(">=", "3mm"), ("<=", "3mm\uf8ff")])

    def test_corrugated_keyword_filter(self) -> None:
        cfg = load_config(REPO_ROOT / "config" / "default.yml")
        corrugated = cfg.part_types["corrugated"]
        self.assertEqual(corrugated.client_filter_field, "Name")
        self.assertEqual(corrugated.client_filter_values, ("Coroplast",))


if __name__ == "__main__":
    unittest.main()
