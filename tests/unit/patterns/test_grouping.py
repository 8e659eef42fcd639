"""Tests for literal-prefix grouping of include patterns."""

from __future__ import annotations

import unittest

from branchscan.patterns import filter_paths, group_paths, optimization_point, starts_with, to_paths


def _assert_grouping_contract(test: unittest.TestCase, patterns, prefix) -> dict:
    groups = group_paths(patterns, prefix)
    expected = {path for path in filter_paths(patterns, prefix) if len(path) > len(prefix)}
    members = [member for group in groups.values() for member in group]

    test.assertEqual(len(members), len(set(members)), "groups overlap")
    test.assertEqual(set(members), expected)
    for key, group in groups.items():
        test.assertTrue(starts_with(key, prefix))
        test.assertGreater(len(key), len(prefix))
        for member in group:
            test.assertTrue(starts_with(member, key))
    next_segments = [key[len(prefix)] for key in groups]
    test.assertEqual(len(next_segments), len(set(next_segments)))
    return groups


class GroupPathsTests(unittest.TestCase):
    def test_default_includes_get_one_group_each(self) -> None:
        patterns = to_paths(["trunk", "branches/*", "tags/*", "sandbox/*"])
        groups = _assert_grouping_contract(self, patterns, ())
        self.assertEqual(
            groups,
            {
                ("branches",): (("branches", "*"),),
                ("sandbox",): (("sandbox", "*"),),
                ("tags",): (("tags", "*"),),
                ("trunk",): (("trunk",),),
            },
        )

    def test_patterns_sharing_a_directory_merge_into_one_group(self) -> None:
        patterns = to_paths(["branches/*", "branches/stable"])
        groups = _assert_grouping_contract(self, patterns, ())
        self.assertEqual(groups, {("branches",): (("branches", "*"), ("branches", "stable"))})

    def test_literal_run_extends_key_until_first_wildcard(self) -> None:
        groups = _assert_grouping_contract(self, to_paths(["a/b/*/c"]), ())
        self.assertEqual(groups, {("a", "b"): (("a", "b", "*", "c"),)})

    def test_input_is_filtered_by_prefix(self) -> None:
        patterns = to_paths(["trunk", "branches/*", "branches/stable"])
        groups = _assert_grouping_contract(self, patterns, ("branches",))
        self.assertEqual(
            groups,
            {
                ("branches", "*"): (("branches", "*"),),
                ("branches", "stable"): (("branches", "stable"),),
            },
        )

    def test_patterns_equal_to_prefix_are_dropped(self) -> None:
        groups = _assert_grouping_contract(self, to_paths(["branches", "branches/*"]), ("branches",))
        self.assertEqual(groups, {("branches", "*"): (("branches", "*"),)})

    def test_mixed_nesting_partitions_input(self) -> None:
        patterns = to_paths(
            [
                "trunk",
                "branches/*",
                "branches/stable",
                "branches/feature/*",
                "tags/*",
                "tags/release-1",
                "users/*/branches/*",
                "users/alice/trunk",
                "x/y/z",
                "x/y/*/w",
            ]
        )
        groups = _assert_grouping_contract(self, patterns, ())
        self.assertEqual(set(groups), {("branches",), ("tags",), ("trunk",), ("users",), ("x",)})
        self.assertEqual(groups[("x",)], (("x", "y", "*", "w"), ("x", "y", "z")))

    def test_empty_input(self) -> None:
        self.assertEqual(group_paths((), ()), {})


class OptimizationPointTests(unittest.TestCase):
    def test_distinct_next_segments_have_no_merge_point(self) -> None:
        self.assertIsNone(optimization_point([("a", "x"), ("b",), ("c", "d")], 0))

    def test_repeated_next_segment_is_returned(self) -> None:
        self.assertEqual(optimization_point([("a", "x"), ("b",), ("a", "y")], 0), "a")
        self.assertEqual(optimization_point([("p", "a"), ("p", "a", "b")], 1), "a")

    def test_keys_not_longer_than_prefix_are_ignored(self) -> None:
        self.assertIsNone(optimization_point([("p",), ("p",)], 1))


if __name__ == "__main__":
    unittest.main()
