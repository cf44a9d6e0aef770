from __future__ import annotations

from typing import Any, Callable, Iterable, Mapping

from rlint.linter import InvalidLinterConfig, Linter
from rlint.rules.lines import line_length_linter, trailing_whitespace_linter
from rlint.rules.tokens import T_and_F_symbol_linter, assignment_linter, semicolon_linter

LinterFactory = Callable[..., Linter]

# Registration order is the order linters run in.
DEFAULT_LINTERS: dict[str, LinterFactory] = {
    "assignment_linter": assignment_linter,
    "line_length_linter": line_length_linter,
    "trailing_whitespace_linter": trailing_whitespace_linter,
    "T_and_F_symbol_linter": T_and_F_symbol_linter,
    "semicolon_linter": semicolon_linter,
}


def build_linters(
    enabled: Iterable[str] | None = None,
    disabled: Iterable[str] = (),
    settings: Mapping[str, Mapping[str, Any]] | None = None,
) -> dict[str, Linter]:
    settings = settings or {}
    enabled_list = list(enabled) if enabled is not None else None
    disabled_set = set(disabled)
    unknown = [
        name
        for name in [*(enabled_list or []), *disabled_set, *settings]
        if name not in DEFAULT_LINTERS
    ]
    if unknown:
        raise InvalidLinterConfig(f"Unknown linter(s): {', '.join(sorted(set(unknown)))}")

    linters: dict[str, Linter] = {}
    for name, factory in DEFAULT_LINTERS.items():
        if enabled_list is not None and name not in enabled_list:
            continue
        if name in disabled_set:
            continue
        try:
            linters[name] = factory(**dict(settings.get(name, {})))
        except TypeError as exc:
            raise InvalidLinterConfig(f"Invalid settings for {name}: {exc}") from exc
    return linters


__all__ = [
    "DEFAULT_LINTERS",
    "LinterFactory",
    "build_linters",
    "assignment_linter",
    "line_length_linter",
    "trailing_whitespace_linter",
    "T_and_F_symbol_linter",
    "semicolon_linter",
]
