from __future__ import annotations

from collections import Counter
import json
from pathlib import Path
from typing import Any

from rlint import __version__
from rlint.models import KNOWN_CATEGORIES, Lint, LintResult


def _lint_to_dict(lint: Lint) -> dict[str, Any]:
    return {
        "filename": lint.filename,
        "line_number": lint.line_number,
        "column_number": lint.column_number,
        "type": lint.type,
        "message": lint.message,
        "line": lint.line,
        "linter": lint.linter,
    }


def to_text_report(result: LintResult) -> str:
    blocks: list[str] = []
    for lint in result.lints:
        header = f"{lint.filename}:{lint.line_number}:{lint.column_number}: {lint.type}: [{lint.linter}] {lint.message}"
        if lint.line is None:
            blocks.append(header)
            continue
        blocks.append("\n".join([header, lint.line, _caret_line(lint)]))
    return "\n".join(blocks)


def _caret_line(lint: Lint) -> str:
    # Tabs are kept so the caret lines up with the echoed source line.
    prefix = "".join(char if char == "\t" else " " for char in (lint.line or "")[: lint.column_number - 1])
    width = 1
    for start, end in lint.ranges:
        if start <= lint.column_number <= end:
            width = end - lint.column_number + 1
            break
    return prefix + "^" + "~" * (width - 1)


def to_json_report(result: LintResult) -> dict[str, Any]:
    counts = Counter(lint.type for lint in result.lints)
    linter_counts = Counter(lint.linter for lint in result.lints)
    type_counts = {category: counts.get(category, 0) for category in KNOWN_CATEGORIES}
    type_counts.update({category: count for category, count in counts.items() if category not in type_counts})
    return {
        "files_linted": result.files_linted,
        "files_with_lints": len({lint.filename for lint in result.lints}),
        "lints_total": len(result.lints),
        "type_counts": type_counts,
        "linter_counts": dict(sorted(linter_counts.items())),
        "lints": [_lint_to_dict(lint) for lint in result.lints],
    }


def to_sarif_report(result: LintResult) -> dict[str, Any]:
    sarif_results: list[dict[str, Any]] = []
    for lint in result.lints:
        sarif_results.append(
            {
                "ruleId": lint.linter,
                "level": _type_to_level(lint.type),
                "message": {"text": lint.message},
                "locations": [
                    {
                        "physicalLocation": {
                            "artifactLocation": {"uri": lint.filename},
                            "region": {"startLine": lint.line_number, "startColumn": lint.column_number},
                        }
                    }
                ],
            }
        )

    rule_ids = sorted({lint.linter for lint in result.lints})
    return {
        "$schema": "https://json.schemastore.org/sarif-2.1.0.json",
        "version": "2.1.0",
        "runs": [
            {
                "tool": {
                    "driver": {
                        "name": "rlint",
                        "version": __version__,
                        "rules": [{"id": rule_id} for rule_id in rule_ids],
                    }
                },
                "results": sarif_results,
            }
        ],
    }


def render_report(result: LintResult, output_format: str) -> str:
    if output_format == "text":
        return to_text_report(result)
    if output_format == "json":
        return json.dumps(to_json_report(result), indent=2)
    if output_format == "sarif":
        return json.dumps(to_sarif_report(result), indent=2)
    raise ValueError(f"Unsupported report format: {output_format}")


def write_report(rendered: str, out: str | None) -> None:
    if out is None:
        if rendered:
            print(rendered)
        return
    output_path = Path(out)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(rendered + "\n", encoding="utf-8")


def _type_to_level(lint_type: str) -> str:
    mapping = {
        "style": "note",
        "warning": "warning",
        "error": "error",
    }
    return mapping.get(lint_type, "warning")
