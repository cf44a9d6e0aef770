from __future__ import annotations

import argparse
from collections import Counter
import sys

from rlint import __version__
from rlint.config import REPORT_FORMATS, Config, load_config
from rlint.linter import InvalidLinterConfig
from rlint.models import KNOWN_CATEGORIES, LintResult
from rlint.quality_gate import evaluate_gate
from rlint.reporters import render_report, write_report
from rlint.rules import DEFAULT_LINTERS, build_linters
from rlint.runner import lint_files


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="rlint", description="Style and correctness linter for R source files.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True)

    lint = subparsers.add_parser("lint", help="Lint one or more R files.")
    lint.add_argument("paths", nargs="+", help="Files to lint.")
    lint.add_argument("--config", help="Path to rlint TOML config.")
    lint.add_argument("--linter", action="append", default=[], help="Only run this linter (repeatable).")
    lint.add_argument("--disable", action="append", default=[], help="Disable a linter (repeatable).")
    lint.add_argument("--no-exclusions", action="store_true", help="Ignore '# nolint' comments.")
    lint.add_argument("--format", choices=list(REPORT_FORMATS), help="Report output format.")
    lint.add_argument("--out", help="Write report to file. Defaults to stdout.")
    lint.add_argument("--fail-on", choices=list(KNOWN_CATEGORIES), help="Fail when a lint of this type or worse is found.")
    lint.add_argument("--max-lints", type=int, help="Fail if lint count exceeds this number.")

    subparsers.add_parser("linters", help="List the available linters in run order.")
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "lint":
        raise SystemExit(run_lint(args))
    if args.command == "linters":
        for name in DEFAULT_LINTERS:
            print(name)
        raise SystemExit(0)


def run_lint(args: argparse.Namespace) -> int:
    try:
        config = load_config(args.config)
    except ValueError as exc:
        print(f"[config] {exc}", file=sys.stderr)
        return 2
    merged = merge_cli_with_config(args, config)
    validation_errors = validate_config(merged)
    if validation_errors:
        for error in validation_errors:
            print(f"[config] {error}", file=sys.stderr)
        return 2

    try:
        linters = build_linters(
            enabled=merged.lint.linters,
            disabled=merged.lint.disabled,
            settings=merged.lint.settings,
        )
    except InvalidLinterConfig as exc:
        print(f"[config] {exc}", file=sys.stderr)
        return 2

    result = lint_files(args.paths, linters=linters, exclusions=merged.lint.exclusions)
    write_report(render_report(result, merged.report.output_format), merged.report.out)
    print_summary(result)

    passed, reasons = evaluate_gate(result, fail_on=merged.gate.fail_on, max_lints=merged.gate.max_lints)
    if not passed:
        for reason in reasons:
            print(f"[gate] {reason}", file=sys.stderr)
        return 1
    return 0


def merge_cli_with_config(args: argparse.Namespace, config: Config) -> Config:
    merged = config
    if args.linter:
        merged.lint.linters = list(dict.fromkeys([*(merged.lint.linters or []), *args.linter]))
    if args.disable:
        merged.lint.disabled = list(dict.fromkeys([*merged.lint.disabled, *args.disable]))
    if args.no_exclusions:
        merged.lint.exclusions = False
    if args.format:
        merged.report.output_format = args.format
    if args.out:
        merged.report.out = args.out
    if args.fail_on:
        merged.gate.fail_on = args.fail_on
    if args.max_lints is not None:
        merged.gate.max_lints = args.max_lints
    return merged


def print_summary(result: LintResult) -> None:
    counts = Counter(lint.type for lint in result.lints)
    line = (
        f"[summary] files={result.files_linted} lints={len(result.lints)} "
        f"style={counts.get('style', 0)} warning={counts.get('warning', 0)} error={counts.get('error', 0)}"
    )
    print(line, file=sys.stderr)


def validate_config(config: Config) -> list[str]:
    errors: list[str] = []
    if config.gate.fail_on is not None and config.gate.fail_on not in KNOWN_CATEGORIES:
        errors.append(f"fail_on must be one of: {', '.join(KNOWN_CATEGORIES)}")
    if config.gate.max_lints is not None and config.gate.max_lints < 0:
        errors.append("max_lints must be >= 0")
    if config.report.output_format not in REPORT_FORMATS:
        errors.append(f"report format must be one of: {', '.join(REPORT_FORMATS)}")
    if config.lint.linters is not None and len(config.lint.linters) == 0:
        errors.append("linters must be non-empty when set")
    for name, values in config.lint.settings.items():
        if not isinstance(values, dict):
            errors.append(f"lint.settings.{name} must be a table")
    return errors


if __name__ == "__main__":
    main()
