"""Reconciliation and reconciliation-issue tests."""

from __future__ import annotations

from tripbudget.domain.enums import Severity
from tripbudget.domain.models import Segment
from tripbudget.planner.budget import allocate_budget, deduct_from_envelope
from tripbudget.validators.budget_validator import reconcile_budget, validate_reconciliation


def _make_segment(segment_type: str, cost: float, **extra) -> Segment:
    return Segment(type=segment_type, estimated_cost=cost, **extra)


def test_empty_segments_are_balanced():
    alloc = allocate_budget(1000, total_days=2)
    result = reconcile_budget(alloc, [])
    assert result.balanced is True
    assert result.total == 0
    assert result.overshoot == 0
    assert result.category_totals == {
        "intercity": 0,
        "accommodation": 0,
        "local_transport": 0,
        "activity": 0,
    }


def test_segments_within_envelopes_are_balanced():
    alloc = allocate_budget(10000, total_days=3)
    segments = [
        _make_segment("outbound_travel", 800),
        _make_segment("accommodation", 1200),
        _make_segment("activity", 1500),
        _make_segment("local_transport", 200),
    ]
    result = reconcile_budget(alloc, segments)
    assert result.balanced is True
    assert result.total == 3700
    assert result.buffer_remaining == alloc.buffer


def test_total_over_budget_reports_overshoot():
    alloc = allocate_budget(1000, total_days=1)
    result = reconcile_budget(alloc, [_make_segment("activity", 5000)])
    assert result.balanced is False
    assert result.overshoot == 4000
    assert result.category_violations[0].category == "activity"
    assert result.buffer_remaining == 0


def test_category_violation_unbalances_even_under_total():
    alloc = allocate_budget(10000, total_days=3)
    result = reconcile_budget(alloc, [_make_segment("outbound_travel", 3000)])
    assert result.overshoot == 0
    assert result.balanced is False
    violation = result.category_violations[0]
    assert violation.category == "intercity"
    assert violation.spent == 3000
    assert violation.envelope == 2000
    assert violation.overshoot == 1000


def test_spend_equal_to_envelope_is_not_a_violation():
    alloc = allocate_budget(10000, total_days=3)
    result = reconcile_budget(alloc, [_make_segment("activity", alloc.activity)])
    assert result.category_violations == []
    assert result.balanced is True


def test_all_travel_types_roll_into_intercity():
    alloc = allocate_budget(10000, total_days=3)
    segments = [
        _make_segment("outbound_travel", 100),
        _make_segment("return_travel", 200),
        _make_segment("intercity_travel", 300),
    ]
    result = reconcile_budget(alloc, segments)
    assert result.category_totals["intercity"] == 600


def test_unknown_types_count_toward_total_only():
    alloc = allocate_budget(1000, total_days=1)
    segments = [_make_segment("food", 50), _make_segment("gem", 25), _make_segment("activity", 10)]
    result = reconcile_budget(alloc, segments)
    assert result.total == 85
    assert sum(result.category_totals.values()) == 10


def test_accepts_loose_mappings():
    alloc = allocate_budget(1000, total_days=1)
    segments = [
        {"type": "Activity", "estimated_cost": "12.5"},
        {"type": "activity", "estimated_cost": -40},
        {"type": "activity", "estimated_cost": None},
    ]
    result = reconcile_budget(alloc, segments)
    assert result.category_totals["activity"] == 12.5


def test_buffer_absorbs_small_overshoot():
    alloc = allocate_budget(1000, total_days=1)
    assert alloc.buffer == 80
    result = reconcile_budget(alloc, [_make_segment("activity", 1050)])
    assert result.overshoot == 50
    assert result.buffer_remaining == 30


def test_reconcile_does_not_touch_allocation():
    alloc = allocate_budget(10000, total_days=3)
    deduct_from_envelope(alloc, "activity", 100)
    before = dict(alloc.remaining)
    reconcile_budget(alloc, [_make_segment("activity", 9999)])
    assert alloc.remaining == before


def test_validate_balanced_result_has_no_issues():
    alloc = allocate_budget(1000, total_days=1)
    assert validate_reconciliation(reconcile_budget(alloc, [])) == []


def test_validate_reports_overshoot_and_envelopes():
    alloc = allocate_budget(1000, total_days=1)
    result = reconcile_budget(alloc, [_make_segment("activity", 5000)])
    issues = validate_reconciliation(result)

    codes = [issue.code for issue in issues]
    assert codes == ["OVER_BUDGET", "ENVELOPE_EXCEEDED"]
    assert issues[0].severity == Severity.HIGH
    assert issues[1].severity == Severity.MEDIUM
    assert issues[1].category == "activity"
    assert issues[0].suggestions
