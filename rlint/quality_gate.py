from __future__ import annotations

from collections import Counter

from rlint.models import LintResult


CATEGORY_ORDER: dict[str, int] = {
    "style": 1,
    "warning": 2,
    "error": 3,
}
UNKNOWN_CATEGORY_RANK = CATEGORY_ORDER["warning"]


def category_rank(category: str) -> int:
    return CATEGORY_ORDER.get(category, UNKNOWN_CATEGORY_RANK)


def evaluate_gate(
    result: LintResult,
    fail_on: str | None = None,
    max_lints: int | None = None,
) -> tuple[bool, list[str]]:
    failed_reasons: list[str] = []

    if fail_on is not None:
        threshold = category_rank(fail_on)
        counts = Counter(lint.type for lint in result.lints if category_rank(lint.type) >= threshold)
        if counts:
            summary = ", ".join(f"{category}={count}" for category, count in sorted(counts.items()))
            failed_reasons.append(f"Detected lints of type >= '{fail_on}' ({summary})")

    if max_lints is not None and len(result.lints) > max_lints:
        failed_reasons.append(f"Lint count {len(result.lints)} exceeds max_lints={max_lints}")

    return (len(failed_reasons) == 0, failed_reasons)
