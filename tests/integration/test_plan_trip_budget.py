"""End-to-end planning runs through the single entrypoint."""

from __future__ import annotations

import io
import json

from tripbudget import plan_trip_budget
from tripbudget.config.settings import PlannerSettings
from tripbudget.infrastructure.logging import StructuredLogger


def _request(budget: float, **overrides) -> dict:
    payload = {
        "budget": budget,
        "currency": "USD",
        "budget_tier": "mid-range",
        "travelers": 2,
        "start_location": "Delhi",
        "stops": [{"location": "Jaipur", "days": 2}, {"location": "Agra", "days": 1}],
    }
    payload.update(overrides)
    return payload


def _activities(*costs: tuple[int, float]) -> list[dict]:
    return [
        {"type": "activity", "estimated_cost": cost, "day_number": day, "title": f"activity-{idx}"}
        for idx, (day, cost) in enumerate(costs)
    ]


def _quiet_logger() -> StructuredLogger:
    return StructuredLogger(trace_id="test", output=io.StringIO())


def test_plan_within_budget_is_balanced():
    plan = plan_trip_budget(
        _request(5000),
        _activities((1, 100), (2, 150), (3, 50)),
        logger=_quiet_logger(),
    )

    assert plan.reconciliation.balanced is True
    assert plan.reconciliation.total == 945
    assert plan.issues == []
    assert plan.removed_segments == []
    assert plan.trace_id == "test"

    assert plan.allocation.remaining_for("activity") == 1850 - 300
    assert plan.allocation.remaining_for("intercity") == 1000 - 480

    assert [day.total_day_cost for day in plan.daily_summary] == [335, 385, 225]


def test_segments_sorted_by_day_then_order():
    plan = plan_trip_budget(_request(5000), _activities((1, 100)), logger=_quiet_logger())
    day_one = [seg.type for seg in plan.segments if seg.day_number == 1]
    assert day_one == ["outbound_travel", "local_transport", "activity", "accommodation"]
    assert plan.segments[-1].type == "return_travel"


def test_zero_budget_returns_empty_plan():
    plan = plan_trip_budget(_request(0), _activities((1, 100)), logger=_quiet_logger())
    assert plan.segments == []
    assert plan.reconciliation.balanced is True
    assert set(plan.allocation.envelopes().values()) == {0}


def test_overshoot_is_scaled_and_trimmed():
    plan = plan_trip_budget(
        _request(1000),
        _activities((1, 600), (2, 300)),
        logger=_quiet_logger(),
    )

    activity_costs = [seg.estimated_cost for seg in plan.segments if seg.type == "activity"]
    assert activity_costs == [246, 123]

    assert [seg.type for seg in plan.removed_segments] == ["local_transport"]
    assert plan.reconciliation.total == 999
    assert plan.reconciliation.overshoot == 0
    # Travel legs alone exceed the intercity envelope.
    assert plan.reconciliation.balanced is False
    assert [issue.code for issue in plan.issues] == ["ENVELOPE_EXCEEDED"]
    assert plan.issues[0].category == "intercity"


def test_auto_correct_disabled_reports_overshoot():
    settings = PlannerSettings(auto_correct=False)
    plan = plan_trip_budget(
        _request(1000),
        _activities((1, 600), (2, 300)),
        settings=settings,
        logger=_quiet_logger(),
    )
    assert plan.removed_segments == []
    assert plan.reconciliation.overshoot == 14
    assert "OVER_BUDGET" in [issue.code for issue in plan.issues]


def test_supplied_activities_are_capped_by_tier():
    plan = plan_trip_budget(
        _request(100_000),
        _activities((1, 5000), (2, 300)),
        logger=_quiet_logger(),
    )
    activity_costs = [seg.estimated_cost for seg in plan.segments if seg.type == "activity"]
    assert activity_costs == [2000, 300]
    assert plan.allocation.remaining_for("activity") == plan.allocation.activity - 2300


def test_strict_budget_rejects_segments_that_do_not_fit():
    plan = plan_trip_budget(
        _request(1000, budget_type="strict"),
        _activities((1, 600), (2, 300)),
        logger=_quiet_logger(),
    )
    assert [seg.estimated_cost for seg in plan.removed_segments] == [123]
    assert plan.reconciliation.total == 891
    assert plan.reconciliation.overshoot == 0
    assert plan.allocation.remaining_for("activity") == 370 - 246


def test_default_currency_from_environment(monkeypatch):
    monkeypatch.setenv("TRIP_DEFAULT_CURRENCY", "INR")
    plan = plan_trip_budget(_request(1_000_000, currency=None), logger=_quiet_logger())
    local = next(seg for seg in plan.segments if seg.type == "local_transport")
    assert local.estimated_cost == 1245


def test_road_trip_with_own_car_drives_every_leg():
    plan = plan_trip_budget(
        _request(
            3000,
            travel_style="road trip",
            own_vehicle_type="car",
            start_location="Bangalore",
            stops=[{"location": "Mysore", "days": 2}, {"location": "Coorg", "days": 1}],
        ),
        logger=_quiet_logger(),
    )
    modes = {seg.metadata["transport_mode"] for seg in plan.segments if seg.type.endswith("_travel")}
    assert modes == {"car"}
    assert plan.allocation.intercity == 300
    assert plan.allocation.activity == 1650


def test_run_emits_phase_events_and_summary():
    buffer = io.StringIO()
    plan_trip_budget(_request(5000), logger=StructuredLogger(trace_id="t-1", output=buffer))
    events = [json.loads(line) for line in buffer.getvalue().splitlines()]

    phases = [event["phase"] for event in events if event["event"] == "phase_end"]
    assert phases == ["allocate", "logistics", "activities", "reconcile"]
    assert events[-1]["event"] == "summary"
    assert events[-1]["balanced"] is True
    assert {event["trace_id"] for event in events} == {"t-1"}
