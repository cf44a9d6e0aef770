from __future__ import annotations

from rlint.linter import InvalidLinterConfig, Linter, require_flags, token_lint
from rlint.models import Lint
from rlint.source import SourceFile

MEMBER_ACCESS_TOKENS = {"'$'", "'@'"}
LOGICAL_SYMBOLS = {"T": "TRUE", "F": "FALSE"}


def assignment_linter() -> Linter:
    """Flag `=` used as an assignment operator; `<-` is preferred."""

    def check(source_file: SourceFile) -> list[Lint]:
        return [
            token_lint(source_file, source_file.with_id(token_id), "Use <-, not =, for assignment.")
            for token_id in source_file.ids_with_token("EQ_ASSIGN")
        ]

    return Linter(check, name="assignment_linter")


def T_and_F_symbol_linter() -> Linter:
    def check(source_file: SourceFile) -> list[Lint]:
        lints: list[Lint] = []
        for token_id in source_file.ids_with_token("SYMBOL"):
            token = source_file.with_id(token_id)
            replacement = LOGICAL_SYMBOLS.get(token.text)
            if replacement is None:
                continue
            previous = source_file.previous_token(token_id)
            if previous is not None and previous.token in MEMBER_ACCESS_TOKENS:
                continue
            lints.append(
                token_lint(source_file, token, f"Use {replacement} instead of the symbol {token.text}.")
            )
        return lints

    return Linter(check, name="T_and_F_symbol_linter")


def semicolon_linter(allow_compound: bool = False, allow_trailing: bool = False) -> Linter:
    """Flag semicolons, distinguishing trailing ones from compound statements."""
    require_flags("semicolon_linter", allow_compound=allow_compound, allow_trailing=allow_trailing)
    if allow_compound and allow_trailing:
        raise InvalidLinterConfig("At least one of allow_compound or allow_trailing must be False.")

    def check(source_file: SourceFile) -> list[Lint]:
        lints: list[Lint] = []
        for token_id in source_file.ids_with_token("';'"):
            token = source_file.with_id(token_id)
            following = source_file.next_token(token_id)
            trailing = following is None or following.line1 > token.line2
            if trailing and not allow_trailing:
                lints.append(token_lint(source_file, token, "Remove trailing semicolons."))
            elif not trailing and not allow_compound:
                lints.append(token_lint(source_file, token, "Replace compound semicolons by a newline."))
        return lints

    return Linter(check, name="semicolon_linter")
