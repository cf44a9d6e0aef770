from __future__ import annotations

from typing import Any, Callable, Iterable, Iterator

from rlint.lexer import Token
from rlint.models import Lint
from rlint.source import SourceFile

CheckFunction = Callable[[SourceFile], Any]


class InvalidLinterConfig(ValueError):
    pass


class Linter:
    """A rule check over one SourceFile. Calling it returns a flat list of Lints."""

    __slots__ = ("name", "_check")

    def __init__(self, check: CheckFunction, name: str | None = None) -> None:
        if not callable(check):
            raise TypeError(f"Linter check must be callable, got {type(check).__name__}")
        self._check = check
        self.name = name or getattr(check, "__name__", "linter")

    def __call__(self, source_file: SourceFile) -> list[Lint]:
        return list(_flatten(self._check(source_file)))

    def __repr__(self) -> str:
        return f"Linter({self.name!r})"


def is_linter(value: object) -> bool:
    return isinstance(value, Linter)


def _flatten(found: Lint | Iterable[Any] | None) -> Iterator[Lint]:
    if found is None:
        return
    if isinstance(found, Lint):
        yield found
        return
    for item in found:
        yield from _flatten(item)


def token_lint(source_file: SourceFile, token: Token, message: str, lint_type: str = "style") -> Lint:
    ranges = ((token.col1, token.col2),) if token.line1 == token.line2 else ()
    return Lint(
        filename=source_file.filename,
        line_number=token.line1,
        column_number=token.col1,
        type=lint_type,
        message=message,
        line=source_file.line(token.line1),
        ranges=ranges,
    )


def require_flags(linter_name: str, **flags: object) -> None:
    for name, value in flags.items():
        if not isinstance(value, bool):
            raise InvalidLinterConfig(f"{linter_name} {name} must be a boolean, got {value!r}")
