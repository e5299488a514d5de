"""Tests for query planning and client-side predicates."""

from __future__ import annotations

import sys
import unittest
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT / "src"))

from PartCatalog.core.match import casefold_contains, contains_any, normalize_text
from PartCatalog.core.query import SearchConfig, ServerFilter, normalize_op
from PartCatalog.services.planner import build_client_predicate, build_server_constraints, plan

_SIGN_TYPES = SearchConfig(
    server_filters=(ServerFilter("Part Group", "=", "Signs"),),
    client_filter_field="Part Type",
    client_filter_values=("Small Signs", "Large Signs"),
)


class TestServerConstraints(unittest.TestCase):
    def test_range_filter_field_becomes_sort_key(self) -> None:
        config = SearchConfig(
            server_filters=(
                ServerFilter("Part Group", "=", "Signs"),
                ServerFilter("Width", ">=", "12"),
            )
        )
        constraints = build_server_constraints(config)
        self.assertEqual(constraints.order_by, "Width")
        self.assertEqual(len(constraints.filters), 2)

    def test_each_range_operator_sets_sort_key(self) -> None:
        for op in (">=", "<=", ">", "<"):
            with self.subTest(op=op):
                config = SearchConfig(server_filters=(ServerFilter("Gauge", op, "0.040"),))
                self.assertEqual(build_server_constraints(config).order_by, "Gauge")

    def test_first_range_filter_wins(self) -> None:
        config = SearchConfig(
            server_filters=(
                ServerFilter("Name", ">=", "3mm"),
                ServerFilter("Width", "<", "48"),
            )
        )
        self.assertEqual(build_server_constraints(config).order_by, "Name")

    def test_equality_only_sorts_by_name(self) -> None:
        config = SearchConfig(server_filters=(ServerFilter("Part Group", "=", "Deltas"),))
        self.assertEqual(build_server_constraints(config).order_by, "Name")

    def test_no_filters_sorts_by_name(self) -> None:
        self.assertEqual(build_server_constraints(SearchConfig()).order_by, "Name")

    def test_fields_lists_filters_then_sort_key_once(self) -> None:
        config = SearchConfig(
            server_filters=(
                ServerFilter("Part Group", "=", "Signs"),
                ServerFilter("Name", ">=", "3mm"),
                ServerFilter("Name", "<=", "3mm\uf8ff"),
            )
        )
        self.assertEqual(build_server_constraints(config).fields, ("Part Group", "Name"))

    def test_double_equals_alias(self) -> None:
        self.assertEqual(normalize_op("=="), "=")
        self.assertEqual(normalize_op(">="), ">=")


class TestClientPredicate(unittest.TestCase):
    def test_keyword_filter_matches_any_value_ignoring_case(self) -> None:
        predicate = build_client_predicate(_SIGN_TYPES, "")
        self.assertTrue(predicate({"Name": "a", "Part Type": "small signs"}))
        self.assertTrue(predicate({"Name": "b", "Part Type": "LARGE SIGNS"}))
        self.assertTrue(predicate({"Name": "c", "Part Type": "Extra Large Signs Kit"}))
        self.assertFalse(predicate({"Name": "d", "Part Type": "Temporary Markings"}))

    def test_term_and_keyword_filter_must_both_match(self) -> None:
        config = SearchConfig(client_filter_field="Part Type", client_filter_values=("Small Signs",))
        predicate = build_client_predicate(config, "acm")
        self.assertFalse(predicate({"Name": "ACM Panel 12x18", "Part Type": "Large Signs"}))
        self.assertTrue(predicate({"Name": "ACM Panel 12x18", "Part Type": "Small Signs"}))
        self.assertFalse(predicate({"Name": "HDPE 12x18", "Part Type": "Small Signs"}))

    def test_term_is_trimmed_and_case_folded(self) -> None:
        predicate = build_client_predicate(SearchConfig(), "  024X24 ")
        self.assertTrue(predicate({"Name": "024x24x18 Alum"}))
        self.assertFalse(predicate({"Name": "040x24x18 Alum"}))

    def test_empty_term_and_no_client_filter_accept_everything(self) -> None:
        predicate = build_client_predicate(SearchConfig(), "")
        self.assertTrue(predicate({}))
        self.assertTrue(predicate({"Name": None}))

    def test_missing_fields_fail_without_raising(self) -> None:
        predicate = build_client_predicate(_SIGN_TYPES, "panel")
        self.assertFalse(predicate({}))
        self.assertFalse(predicate({"Name": "Panel"}))

    def test_client_field_without_values_is_vacuous(self) -> None:
        config = SearchConfig(client_filter_field="Part Type", client_filter_values=())
        predicate = build_client_predicate(config, "")
        self.assertTrue(predicate({"Name": "x", "Part Type": "anything"}))

    def test_non_string_values_are_matched_as_text(self) -> None:
        config = SearchConfig(client_filter_field="Width", client_filter_values=("24",))
        predicate = build_client_predicate(config, "")
        self.assertTrue(predicate({"Name": "x", "Width": 24}))

    def test_plan_returns_both_halves(self) -> None:
        constraints, predicate = plan(_SIGN_TYPES, "sign")
        self.assertEqual(constraints.order_by, "Name")
        self.assertTrue(predicate({"Name": "Sign 1", "Part Type": "Small Signs"}))


class TestMatchHelpers(unittest.TestCase):
    def test_casefold_contains(self) -> None:
        self.assertTrue(casefold_contains("Coroplast 24x18", "COROPLAST"))
        self.assertTrue(casefold_contains("anything", ""))
        self.assertTrue(casefold_contains(None, "   "))
        self.assertFalse(casefold_contains(None, "x"))
        self.assertFalse(casefold_contains("magnet", "banner"))

    def test_casefold_handles_unicode_folding(self) -> None:
        self.assertTrue(casefold_contains("STRASSE Sign", "straße"))

    def test_contains_any(self) -> None:
        self.assertTrue(contains_any("PMPS Decal", ("opus", "pmps")))
        self.assertFalse(contains_any(None, ("opus",)))
        self.assertFalse(contains_any("banner", ()))

    def test_normalize_text(self) -> None:
        self.assertEqual(normalize_text("  Small Signs "), "small signs")
        self.assertEqual(normalize_text(None), "")


if __name__ == "__main__":
    unittest.main()
