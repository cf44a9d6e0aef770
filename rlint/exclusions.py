from __future__ import annotations

import re
from typing import Iterable

from rlint.models import Lint
from rlint.source import SourceFile

NOLINT_START_PATTERN = re.compile(r"#\s*nolint\s+start\b", re.IGNORECASE)
NOLINT_END_PATTERN = re.compile(r"#\s*nolint\s+end\b", re.IGNORECASE)
NOLINT_PATTERN = re.compile(r"#\s*nolint\b(?:\s*:\s*(?P<linters>[^.]*)\.?)?", re.IGNORECASE)
ALL_LINTERS = "*"


def comment_lines(source_file: SourceFile) -> list[tuple[int, str]]:
    return [
        (token.line1, token.text)
        for token in (source_file.with_id(token_id) for token_id in source_file.ids_with_token("COMMENT"))
    ]


def raw_comment_lines(lines: Iterable[str]) -> list[tuple[int, str]]:
    """Best-effort comment discovery for files that did not lex."""
    found: list[tuple[int, str]] = []
    for idx, line in enumerate(lines, start=1):
        hash_at = line.find("#")
        if hash_at != -1:
            found.append((idx, line[hash_at:]))
    return found


def parse_exclusions(comments: list[tuple[int, str]], last_line: int) -> dict[int, set[str]]:
    """Map line numbers to the linter names suppressed there ("*" for all)."""
    excluded: dict[int, set[str]] = {}
    block_start: int | None = None

    for line_number, text in comments:
        if NOLINT_END_PATTERN.search(text):
            if block_start is not None:
                _exclude_range(excluded, block_start, line_number)
                block_start = None
            continue
        if NOLINT_START_PATTERN.search(text):
            if block_start is None:
                block_start = line_number
            continue
        match = NOLINT_PATTERN.search(text)
        if not match:
            continue
        names = match.group("linters")
        parsed = {name.strip() for name in names.split(",") if name.strip()} if names else set()
        excluded.setdefault(line_number, set()).update(parsed or {ALL_LINTERS})

    if block_start is not None:
        _exclude_range(excluded, block_start, max(last_line, block_start))
    return excluded


def _exclude_range(excluded: dict[int, set[str]], start: int, end: int) -> None:
    for line_number in range(start, end + 1):
        excluded.setdefault(line_number, set()).add(ALL_LINTERS)


def is_excluded(lint: Lint, excluded: dict[int, set[str]]) -> bool:
    names = excluded.get(lint.line_number)
    if not names:
        return False
    if ALL_LINTERS in names:
        return True
    return any(lint.linter in (name, f"{name}_linter") for name in names)


def filter_excluded(lints: list[Lint], excluded: dict[int, set[str]]) -> list[Lint]:
    if not excluded:
        return lints
    return [lint for lint in lints if not is_excluded(lint, excluded)]
