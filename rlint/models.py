from __future__ import annotations

from dataclasses import dataclass

KNOWN_CATEGORIES: tuple[str, ...] = ("style", "warning", "error")


@dataclass(frozen=True, slots=True)
class Lint:
    """One reported issue. Positions are 1-based against the unmodified source."""

    filename: str
    line_number: int
    column_number: int
    type: str
    message: str
    line: str | None = None
    ranges: tuple[tuple[int, int], ...] = ()
    linter: str = ""


@dataclass(slots=True)
class LintResult:
    lints: list[Lint]
    files_linted: int
