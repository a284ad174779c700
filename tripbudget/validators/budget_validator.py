"""预算对账：按类别汇总实际花费并与预算信封比较（只读，不修改 allocation 或 segments）"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from tripbudget.domain.constants import RECONCILED_CATEGORIES, SEGMENT_CATEGORY
from tripbudget.domain.enums import Severity
from tripbudget.domain.models import (
    Allocation,
    CategoryViolation,
    ReconciliationResult,
    Segment,
    ValidationIssue,
)

_LOGGER = logging.getLogger("trip-budget.reconcile")


def _as_segment(row: Segment | Mapping[str, Any]) -> Segment:
    if isinstance(row, Segment):
        return row
    return Segment.model_validate(row)


def reconcile_budget(
    allocation: Allocation,
    segments: Iterable[Segment | Mapping[str, Any]],
) -> ReconciliationResult:
    rows = [_as_segment(row) for row in segments]

    category_totals = {category.value: 0.0 for category in RECONCILED_CATEGORIES}
    total = 0.0
    for row in rows:
        total += row.estimated_cost
        category = SEGMENT_CATEGORY.get(row.type)
        # 未知类型只计入总额
        if category is not None:
            category_totals[category.value] += row.estimated_cost

    violations: list[CategoryViolation] = []
    for category in RECONCILED_CATEGORIES:
        envelope = allocation.envelope(category)
        if envelope is None:
            continue
        spent = category_totals[category.value]
        if spent > envelope:
            violations.append(
                CategoryViolation(
                    category=category.value,
                    spent=round(spent, 2),
                    envelope=envelope,
                    overshoot=round(spent - envelope, 2),
                )
            )

    overshoot = max(0.0, total - allocation.total_budget)
    balanced = overshoot == 0 and not violations
    if not balanced:
        _LOGGER.warning(
            "budget unbalanced total=%.2f budget=%.2f overshoot=%.2f violations=%s",
            total,
            allocation.total_budget,
            overshoot,
            [v.category for v in violations],
        )

    return ReconciliationResult(
        budget=allocation.total_budget,
        total=round(total, 2),
        category_totals={key: round(value, 2) for key, value in category_totals.items()},
        overshoot=round(overshoot, 2),
        buffer_remaining=round(max(0.0, allocation.buffer - overshoot), 2),
        category_violations=violations,
        balanced=balanced,
    )


def validate_reconciliation(result: ReconciliationResult) -> list[ValidationIssue]:
    issues: list[ValidationIssue] = []

    if result.overshoot > 0:
        issues.append(
            ValidationIssue(
                code="OVER_BUDGET",
                severity=Severity.HIGH,
                message=f"total spend {result.total:.0f} exceeds budget {result.budget:.0f} by {result.overshoot:.0f}",
                suggestions=[
                    "drop paid activities",
                    "choose a cheaper transport mode",
                    "increase budget",
                ],
            )
        )

    for violation in result.category_violations:
        issues.append(
            ValidationIssue(
                code="ENVELOPE_EXCEEDED",
                severity=Severity.MEDIUM,
                category=violation.category,
                message=(
                    f"{violation.category} spend {violation.spent:.0f} exceeds envelope "
                    f"{violation.envelope} by {violation.overshoot:.0f}"
                ),
                suggestions=[f"trim {violation.category} segments"],
            )
        )
    return issues
