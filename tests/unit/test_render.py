"""Tests for terminal and JSON rendering of patch sets."""

from __future__ import annotations

import unittest

from httpdiff.core.patches import PatchSet
from httpdiff.core.tree import OrderedTree
from httpdiff.core.types import Patch, PatchKind
from httpdiff.extract import FacetDiff
from httpdiff.render import (
    END_BANNER,
    GREEN,
    RED,
    RESET,
    comparison_to_dict,
    format_comparison,
    format_patch,
    format_patches,
    format_path,
    format_value,
)
from httpdiff.version import HTTPDIFF_VERSION, REPORT_SCHEMA_VERSION


class TestFormatPath(unittest.TestCase):
    def test_root(self):
        self.assertEqual(format_path([]), "")

    def test_single_and_nested(self):
        self.assertEqual(format_path(["info"]), "info:")
        self.assertEqual(format_path(("info", "age")), "info.age:")


class TestFormatValue(unittest.TestCase):
    def test_scalars(self):
        self.assertEqual(format_value("text"), "text")
        self.assertEqual(format_value(None), "null")
        self.assertEqual(format_value(True), "true")
        self.assertEqual(format_value(3), "3")
        self.assertEqual(format_value([1, "a"]), '[1, "a"]')

    def test_tree_is_pretty_json_in_key_order(self):
        tree = OrderedTree([("b", 1), ("a", OrderedTree([("c", None)]))])
        self.assertEqual(
            format_value(tree),
            '{\n  "b": 1,\n  "a": {\n    "c": null\n  }\n}',
        )


class TestFormatPatch(unittest.TestCase):
    def test_insert(self):
        patch = Patch(PatchKind.INSERT, ("a", "b"), None, 2)
        self.assertEqual(format_patch(patch, color=False), ["+ a.b: 2", ""])
        self.assertEqual(format_patch(patch), [f"{GREEN}+ a.b: 2{RESET}", ""])

    def test_delete(self):
        patch = Patch(PatchKind.DELETE, ("a",), "x", None)
        self.assertEqual(format_patch(patch, color=False), ["- a: x", ""])
        self.assertEqual(format_patch(patch), [f"{RED}- a: x{RESET}", ""])

    def test_update(self):
        patch = Patch(PatchKind.UPDATE, ("a",), 1, 10)
        self.assertEqual(format_patch(patch, color=False), ["a:", "- 1", "+ 10", ""])

    def test_root_update(self):
        patch = Patch(PatchKind.UPDATE, (), 200, 404)
        self.assertEqual(format_patch(patch, color=False), ["", "- 200", "+ 404", ""])

    def test_reorder(self):
        patch = Patch(PatchKind.REORDER, ("h", "Host"), 1, 0)
        self.assertEqual(format_patch(patch, color=False), ["[1] -> [0] h.Host: ...", ""])
        self.assertEqual(
            format_patch(patch),
            [f"{RED}[1]{RESET} -> {GREEN}[0] {RESET}h.Host: ...", ""],
        )


class TestFormatPatches(unittest.TestCase):
    def test_empty_set_renders_nothing(self):
        self.assertEqual(format_patches(PatchSet.empty(), "METHOD"), "")

    def test_sections_in_display_order(self):
        patches = (
            PatchSet.empty()
            .add("insert", ["n"], None, 1)
            .add("reorder", ["a"], 0, 1)
            .add("delete", ["d"], 5, None)
        )
        text = format_patches(patches, "RESPONSE BODY", color=False)
        self.assertEqual(
            text.split("\n"),
            [
                "----- RESPONSE BODY -----",
                "DELETES",
                "- d: 5",
                "",
                "INSERTS",
                "+ n: 1",
                "",
                "REORDERS",
                "[0] -> [1] a: ...",
                "",
            ],
        )


class TestComparison(unittest.TestCase):
    def _results(self):
        return [
            FacetDiff("method", "METHOD", PatchSet.empty().add("update", [], "GET", "POST")),
            FacetDiff("version", "HTTP VERSION", PatchSet.empty()),
        ]

    def test_text_skips_empty_facets_and_ends_with_banner(self):
        text = format_comparison(self._results(), color=False)
        self.assertIn("----- METHOD -----", text)
        self.assertNotIn("HTTP VERSION", text)
        self.assertTrue(text.endswith(END_BANNER))

    def test_no_differences_is_just_banner(self):
        self.assertEqual(format_comparison([], color=False), END_BANNER)

    def test_json_report(self):
        report = comparison_to_dict(self._results())
        self.assertEqual(report["httpdiff_version"], HTTPDIFF_VERSION)
        self.assertEqual(report["schema_version"], REPORT_SCHEMA_VERSION)
        self.assertEqual([f["name"] for f in report["facets"]], ["method", "version"])
        self.assertEqual(
            report["facets"][0]["patches"]["updates"][0],
            {"type": "update", "path": [], "old_value": "GET", "new_value": "POST"},
        )


if __name__ == "__main__":
    unittest.main()
