from __future__ import annotations

import os
from pathlib import Path
import tempfile
import unittest

from rlint.config import Config, load_config


class ConfigTests(unittest.TestCase):
    def test_defaults_without_file(self) -> None:
        cwd = os.getcwd()
        with tempfile.TemporaryDirectory() as tmp:
            os.chdir(tmp)
            try:
                config = load_config(None)
            finally:
                os.chdir(cwd)

        self.assertEqual(config, Config())
        self.assertIsNone(config.lint.linters)
        self.assertTrue(config.lint.exclusions)
        self.assertEqual(config.report.output_format, "text")

    def test_missing_explicit_file_raises(self) -> None:
        with self.assertRaises(FileNotFoundError):
            load_config("/nonexistent/rlint.toml")

    def test_loads_toml(self) -> None:
        content = """
[lint]
linters = ["assignment_linter", "line_length_linter"]
disabled = ["semicolon_linter"]
exclusions = false

[lint.settings.line_length_linter]
length = 100

[report]
format = "json"
out = "lints.json"

[gate]
fail_on = "warning"
max_lints = 5
"""
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "rlint.toml"
            path.write_text(content, encoding="utf-8")
            config = load_config(str(path))

        self.assertEqual(config.lint.linters, ["assignment_linter", "line_length_linter"])
        self.assertEqual(config.lint.disabled, ["semicolon_linter"])
        self.assertFalse(config.lint.exclusions)
        self.assertEqual(config.lint.settings, {"line_length_linter": {"length": 100}})
        self.assertEqual(config.report.output_format, "json")
        self.assertEqual(config.report.out, "lints.json")
        self.assertEqual(config.gate.fail_on, "warning")
        self.assertEqual(config.gate.max_lints, 5)


    def test_settings_must_be_a_table(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "rlint.toml"
            path.write_text("[lint]\nsettings = 3\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_config(str(path))


if __name__ == "__main__":
    unittest.main()
