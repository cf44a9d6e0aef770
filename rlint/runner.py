from __future__ import annotations

from dataclasses import replace
from pathlib import Path
from typing import Iterable, Mapping

from rlint.exclusions import comment_lines, filter_excluded, parse_exclusions, raw_comment_lines
from rlint.lexer import RParseError
from rlint.linter import Linter
from rlint.models import Lint, LintResult
from rlint.rules import build_linters
from rlint.source import parse_source

PARSE_ERROR_LINTER = "error"


def lint_source(
    text: str,
    filename: str = "<text>",
    linters: Mapping[str, Linter] | None = None,
    exclusions: bool = True,
) -> list[Lint]:
    if linters is None:
        linters = build_linters()

    lines = text.split("\n")
    try:
        source_file = parse_source(text, filename)
    except RParseError as exc:
        line = lines[exc.line - 1] if 0 < exc.line <= len(lines) else None
        found = [
            Lint(
                filename=filename,
                line_number=exc.line,
                column_number=exc.column,
                type="error",
                message=exc.message,
                line=line,
                linter=PARSE_ERROR_LINTER,
            )
        ]
        comments = raw_comment_lines(lines)
    else:
        found = []
        for name, linter in linters.items():
            found.extend(replace(lint, filename=filename, linter=name) for lint in linter(source_file))
        comments = comment_lines(source_file)

    if exclusions:
        found = filter_excluded(found, parse_exclusions(comments, last_line=len(lines)))
    return _dedupe_lints(found)


def lint_file(
    path: str | Path,
    linters: Mapping[str, Linter] | None = None,
    exclusions: bool = True,
    display_name: str | None = None,
) -> list[Lint]:
    file_path = Path(path)
    name = display_name or str(file_path)
    try:
        text = file_path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        return [
            Lint(
                filename=name,
                line_number=1,
                column_number=1,
                type="error",
                message=f"Unable to read file: {exc}",
                linter=PARSE_ERROR_LINTER,
            )
        ]
    return lint_source(text, filename=name, linters=linters, exclusions=exclusions)


def lint_files(
    paths: Iterable[str | Path],
    linters: Mapping[str, Linter] | None = None,
    exclusions: bool = True,
) -> LintResult:
    if linters is None:
        linters = build_linters()
    lints: list[Lint] = []
    files_linted = 0
    for path in paths:
        files_linted += 1
        lints.extend(lint_file(path, linters=linters, exclusions=exclusions))
    return LintResult(lints=lints, files_linted=files_linted)


def _dedupe_lints(lints: list[Lint]) -> list[Lint]:
    unique: dict[tuple[str, int, int, str, str], Lint] = {}
    for lint in lints:
        key = (lint.filename, lint.line_number, lint.column_number, lint.linter, lint.message)
        unique.setdefault(key, lint)
    return sorted(unique.values(), key=lambda lint: (lint.line_number, lint.column_number, lint.linter))
