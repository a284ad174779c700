"""Deterministic logistics segments: travel legs, local commutes and stays."""

from __future__ import annotations

import logging
from typing import Optional

from tripbudget.domain.constants import (
    LOGISTICS_SEGMENT_TYPES,
    MODE_LABELS,
    ORDER_ACCOMMODATION,
    ORDER_INTERCITY,
    ORDER_LOCAL_TRANSPORT,
    ORDER_OUTBOUND,
    ORDER_RETURN,
    SEGMENT_CATEGORY,
    SEGMENT_TYPE_LABELS,
)
from tripbudget.domain.enums import BudgetCategory, BudgetTier, SegmentType
from tripbudget.domain.models import Allocation, Segment, TripPlanRequest, category_key
from tripbudget.planner.budget import deduct_from_envelope
from tripbudget.planner.distance import estimate_distance_tier
from tripbudget.planner.transport import (
    calculate_accommodation_cost,
    calculate_local_transport_cost,
    calculate_transport_cost,
    decide_transport_mode,
)

_LOGGER = logging.getLogger("trip-budget.logistics")


def segment_category(segment_type: str) -> Optional[BudgetCategory]:
    return SEGMENT_CATEGORY.get(category_key(segment_type))


def segment_type_label(segment_type: str) -> str:
    key = category_key(segment_type)
    return SEGMENT_TYPE_LABELS.get(key, key)


def is_logistics_segment(segment_type: str) -> bool:
    return category_key(segment_type) in LOGISTICS_SEGMENT_TYPES


def _same_place(a: str | None, b: str | None) -> bool:
    return str(a or "").strip().lower() == str(b or "").strip().lower()


def _travel_segment(
    request: TripPlanRequest,
    segment_type: SegmentType,
    origin: str,
    destination: str,
    *,
    day_number: int,
    order_index: int,
    currency: str,
) -> Segment:
    tier = estimate_distance_tier(origin, destination)
    mode = decide_transport_mode(request.profile(), tier)
    cost = calculate_transport_cost(mode, tier, request.travelers, currency)
    return Segment(
        type=segment_type,
        title=f"{MODE_LABELS[mode]}: {origin} -> {destination}",
        day_number=day_number,
        order_index=order_index,
        location=origin,
        estimated_cost=cost,
        metadata={
            "transport_mode": mode.value,
            "distance_tier": tier.value,
            "from": origin,
            "to": destination,
            "per_person": cost // request.travelers,
        },
    )


def _day_locations(request: TripPlanRequest) -> list[str]:
    locations: list[str] = []
    for stop in request.stops:
        locations.extend([stop.location] * stop.days)
    return locations


def build_logistics_segments(
    request: TripPlanRequest,
    allocation: Allocation | None = None,
    *,
    currency: str = "USD",
    budget_tier: BudgetTier | str | None = None,
) -> list[Segment]:
    """Build travel, local transport and accommodation segments for a trip.

    When ``allocation`` is given every committed cost is deducted from its
    envelope. Travel legs are always committed; local transport and stays stop
    being generated once their envelope has nothing left.
    """
    days = _day_locations(request)
    if not days or not request.stops:
        return []

    currency = request.currency or currency
    tier = budget_tier or request.budget_tier or BudgetTier.MID_RANGE
    segments: list[Segment] = []

    def commit(segment: Segment) -> None:
        segments.append(segment)
        category = segment_category(segment.type)
        if allocation is not None and category is not None:
            deduct_from_envelope(allocation, category, segment.estimated_cost)

    def envelope_open(category: BudgetCategory) -> bool:
        return allocation is None or allocation.remaining_for(category) > 0

    first_stop = request.stops[0].location
    if request.start_location and not _same_place(request.start_location, first_stop):
        commit(
            _travel_segment(
                request,
                SegmentType.OUTBOUND_TRAVEL,
                request.start_location,
                first_stop,
                day_number=1,
                order_index=ORDER_OUTBOUND,
                currency=currency,
            )
        )

    transition_day = 0
    for current, following in zip(request.stops, request.stops[1:]):
        transition_day += current.days
        if _same_place(current.location, following.location):
            continue
        commit(
            _travel_segment(
                request,
                SegmentType.INTERCITY_TRAVEL,
                current.location,
                following.location,
                day_number=max(transition_day, 1),
                order_index=ORDER_INTERCITY,
                currency=currency,
            )
        )

    last_stop = request.stops[-1].location
    return_location = request.return_location or request.start_location
    if return_location and not _same_place(return_location, last_stop):
        commit(
            _travel_segment(
                request,
                SegmentType.RETURN_TRAVEL,
                last_stop,
                return_location,
                day_number=len(days),
                order_index=ORDER_RETURN,
                currency=currency,
            )
        )

    local_cost = calculate_local_transport_cost(tier, currency)
    for day_number, location in enumerate(days, start=1):
        if not envelope_open(BudgetCategory.LOCAL_TRANSPORT):
            _LOGGER.debug("local transport envelope exhausted at day=%s", day_number)
            break
        commit(
            Segment(
                type=SegmentType.LOCAL_TRANSPORT,
                title=f"Local transport in {location}",
                day_number=day_number,
                order_index=ORDER_LOCAL_TRANSPORT,
                location=location,
                estimated_cost=local_cost,
                metadata={"budget_tier": str(getattr(tier, "value", tier))},
            )
        )

    night_cost = calculate_accommodation_cost(tier, currency)
    # No stay after the final day.
    for day_number, location in enumerate(days[:-1], start=1):
        if not envelope_open(BudgetCategory.ACCOMMODATION):
            _LOGGER.debug("accommodation envelope exhausted at night=%s", day_number)
            break
        commit(
            Segment(
                type=SegmentType.ACCOMMODATION,
                title=f"Stay in {location}",
                day_number=day_number,
                order_index=ORDER_ACCOMMODATION,
                location=location,
                estimated_cost=night_cost,
                metadata={"accommodation_tier": str(getattr(tier, "value", tier))},
            )
        )

    return segments
