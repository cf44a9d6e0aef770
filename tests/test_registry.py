from __future__ import annotations

import unittest

from rlint.linter import InvalidLinterConfig
from rlint.rules import DEFAULT_LINTERS, build_linters
from rlint.source import parse_source


class RegistryTests(unittest.TestCase):
    def test_default_registry_order(self) -> None:
        self.assertEqual(list(DEFAULT_LINTERS)[0], "assignment_linter")
        self.assertEqual(list(build_linters()), list(DEFAULT_LINTERS))

    def test_enabled_and_disabled(self) -> None:
        linters = build_linters(enabled=["semicolon_linter", "assignment_linter"])
        self.assertEqual(list(linters), ["assignment_linter", "semicolon_linter"])

        linters = build_linters(disabled=["line_length_linter"])
        self.assertNotIn("line_length_linter", linters)
        self.assertIn("assignment_linter", linters)

    def test_settings_are_passed_to_factories(self) -> None:
        linters = build_linters(settings={"line_length_linter": {"length": 3}})
        found = linters["line_length_linter"](parse_source("abcd\n"))
        self.assertEqual(found[0].column_number, 4)

    def test_unknown_linter_names_are_rejected(self) -> None:
        with self.assertRaises(InvalidLinterConfig):
            build_linters(enabled=["nope_linter"])
        with self.assertRaises(InvalidLinterConfig):
            build_linters(settings={"nope_linter": {}})

    def test_bad_settings_are_rejected(self) -> None:
        with self.assertRaises(InvalidLinterConfig):
            build_linters(settings={"assignment_linter": {"strict": True}})
        with self.assertRaises(InvalidLinterConfig):
            build_linters(settings={"line_length_linter": {"length": 0}})


if __name__ == "__main__":
    unittest.main()
