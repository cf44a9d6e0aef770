from __future__ import annotations

import re

from rlint.linter import InvalidLinterConfig, Linter, require_flags
from rlint.models import Lint
from rlint.source import SourceFile

TRAILING_WHITESPACE_PATTERN = re.compile(r"[ \t]+$")
DEFAULT_LINE_LENGTH = 80


def line_length_linter(length: int = DEFAULT_LINE_LENGTH) -> Linter:
    if isinstance(length, bool) or not isinstance(length, int) or length < 1:
        raise InvalidLinterConfig(f"line_length_linter length must be a positive integer, got {length!r}")

    def check(source_file: SourceFile) -> list[Lint]:
        lints: list[Lint] = []
        for idx, line in source_file.numbered_lines():
            if len(line) <= length:
                continue
            lints.append(
                Lint(
                    filename=source_file.filename,
                    line_number=idx,
                    column_number=length + 1,
                    type="style",
                    message=f"Lines should not be more than {length} characters. This line is {len(line)} characters.",
                    line=line,
                    ranges=((1, len(line)),),
                )
            )
        return lints

    return Linter(check, name="line_length_linter")


def trailing_whitespace_linter(allow_empty_lines: bool = False, allow_in_strings: bool = True) -> Linter:
    require_flags("trailing_whitespace_linter", allow_empty_lines=allow_empty_lines, allow_in_strings=allow_in_strings)

    def check(source_file: SourceFile) -> list[Lint]:
        string_lines = _lines_inside_strings(source_file) if allow_in_strings else set()
        lints: list[Lint] = []
        for idx, line in source_file.numbered_lines():
            match = TRAILING_WHITESPACE_PATTERN.search(line)
            if not match or idx in string_lines:
                continue
            if allow_empty_lines and match.start() == 0:
                continue
            lints.append(
                Lint(
                    filename=source_file.filename,
                    line_number=idx,
                    column_number=match.start() + 1,
                    type="style",
                    message="Trailing whitespace is superfluous.",
                    line=line,
                    ranges=((match.start() + 1, match.end()),),
                )
            )
        return lints

    return Linter(check, name="trailing_whitespace_linter")


def _lines_inside_strings(source_file: SourceFile) -> set[int]:
    # Every line of a multi-line string except the closing one ends inside the literal.
    inside: set[int] = set()
    for token_id in source_file.ids_with_token("STR_CONST"):
        token = source_file.with_id(token_id)
        inside.update(range(token.line1, token.line2))
    return inside
