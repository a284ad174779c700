"""Logistics segment generation tests."""

from __future__ import annotations

from tripbudget.domain.enums import BudgetCategory
from tripbudget.domain.models import TripPlanRequest
from tripbudget.planner.budget import allocate_budget
from tripbudget.planner.logistics import (
    build_logistics_segments,
    is_logistics_segment,
    segment_category,
    segment_type_label,
)


def _make_request(**overrides) -> TripPlanRequest:
    payload = {
        "budget": 2000,
        "currency": "USD",
        "budget_tier": "mid-range",
        "travelers": 2,
        "start_location": "Delhi",
        "stops": [{"location": "Jaipur", "days": 2}, {"location": "Agra", "days": 1}],
    }
    payload.update(overrides)
    return TripPlanRequest.model_validate(payload)


def test_segment_vocabulary_helpers():
    assert segment_category("outbound_travel") == BudgetCategory.INTERCITY
    assert segment_category("Return_Travel") == BudgetCategory.INTERCITY
    assert segment_category("food") is None
    assert segment_type_label("local_transport") == "Local Transport"
    assert segment_type_label("mystery") == "mystery"
    assert is_logistics_segment("accommodation") is True
    assert is_logistics_segment("activity") is False


def test_builds_travel_local_and_stay_segments():
    segments = build_logistics_segments(_make_request())
    types = [seg.type for seg in segments]
    assert types == [
        "outbound_travel",
        "intercity_travel",
        "return_travel",
        "local_transport",
        "local_transport",
        "local_transport",
        "accommodation",
        "accommodation",
    ]


def test_travel_legs_carry_mode_and_tier():
    segments = build_logistics_segments(_make_request())
    outbound, intercity, back = segments[:3]

    assert outbound.title == "Flight: Delhi -> Jaipur"
    assert outbound.day_number == 1
    assert outbound.estimated_cost == 160
    assert outbound.metadata["transport_mode"] == "flight"
    assert outbound.metadata["distance_tier"] == "short"
    assert outbound.metadata["per_person"] == 80

    assert intercity.day_number == 2
    assert intercity.metadata["from"] == "Jaipur"
    assert intercity.metadata["to"] == "Agra"

    assert back.day_number == 3
    assert back.metadata["to"] == "Delhi"


def test_local_and_stay_costs_follow_tier():
    segments = build_logistics_segments(_make_request(budget_tier="luxury"))
    local = [seg for seg in segments if seg.type == "local_transport"]
    stays = [seg for seg in segments if seg.type == "accommodation"]
    assert {seg.estimated_cost for seg in local} == {40}
    assert {seg.estimated_cost for seg in stays} == {200}
    assert [seg.location for seg in stays] == ["Jaipur", "Jaipur"]


def test_no_outbound_or_return_when_starting_at_first_stop():
    request = _make_request(start_location="jaipur", return_location="Agra")
    types = [seg.type for seg in build_logistics_segments(request)]
    assert "outbound_travel" not in types
    assert "return_travel" not in types
    assert types.count("intercity_travel") == 1


def test_no_stops_means_no_segments():
    assert build_logistics_segments(_make_request(stops=[])) == []


def test_own_car_drives_short_legs():
    request = _make_request(
        travelers=1,
        start_location="Bangalore",
        stops=[{"location": "Mysore", "days": 2}],
        own_vehicle_type="car",
    )
    travel = [seg for seg in build_logistics_segments(request) if seg.type.endswith("_travel")]
    assert [seg.metadata["transport_mode"] for seg in travel] == ["car", "car"]
    assert travel[0].title.startswith("Drive:")
    assert travel[0].estimated_cost == 24


def test_committed_costs_are_deducted():
    request = _make_request(budget=5000)
    alloc = allocate_budget(5000, total_days=3)
    build_logistics_segments(request, alloc)
    assert alloc.remaining_for("intercity") == 1000 - 480
    assert alloc.remaining_for("local_transport") == 250 - 45
    assert alloc.remaining_for("accommodation") == 1500 - 120
    assert alloc.remaining_for("activity") == alloc.activity


def test_exhausted_envelopes_stop_local_and_stays():
    request = _make_request(budget=100)
    alloc = allocate_budget(100, total_days=3)
    assert alloc.local_transport == 5
    assert alloc.accommodation == 30

    segments = build_logistics_segments(request, alloc)
    assert [seg.type for seg in segments].count("local_transport") == 1
    assert [seg.type for seg in segments].count("accommodation") == 1
    # Travel legs are committed regardless of envelope.
    assert [seg.type for seg in segments].count("return_travel") == 1
    assert alloc.remaining_for("intercity") == 0


def test_request_currency_wins_over_argument():
    request = _make_request(currency="INR")
    segments = build_logistics_segments(request, currency="USD")
    local = next(seg for seg in segments if seg.type == "local_transport")
    assert local.estimated_cost == 1245
