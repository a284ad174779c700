"""Budget envelopes: allocation, deductions and the strict-budget guard."""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

from tripbudget.domain.constants import (
    BUDGET_TIER_RATIOS,
    DEFAULT_RATIOS,
    OWN_VEHICLE_INTERCITY_SHIFT,
    ROAD_TRIP_RATIOS,
    ROAD_TRIP_STYLE,
)
from tripbudget.domain.enums import BudgetCategory, SegmentType
from tripbudget.domain.models import (
    Allocation,
    AllocationMeta,
    AllocationOptions,
    Segment,
    StrictBudgetCheck,
    category_key,
    to_amount,
)

_LOGGER = logging.getLogger("trip-budget.allocator")

STRICT_BUDGET_TYPE = "strict"


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _coerce_options(options: AllocationOptions | Mapping[str, Any] | None, overrides: dict[str, Any]) -> AllocationOptions:
    if isinstance(options, AllocationOptions):
        if not overrides:
            return options
        payload = options.model_dump()
    else:
        payload = dict(options or {})
    payload.update(overrides)
    return AllocationOptions.model_validate(payload)


def select_ratios(options: AllocationOptions) -> dict[BudgetCategory, float]:
    """Pick the ratio table for a trip and apply the own-vehicle shift."""
    road_trip = options.travel_style == ROAD_TRIP_STYLE
    if road_trip:
        ratios = dict(ROAD_TRIP_RATIOS)
    else:
        ratios = dict(BUDGET_TIER_RATIOS.get(options.budget_tier, DEFAULT_RATIOS))

    # Road-trip ratios already assume the traveller drives.
    if options.has_own_vehicle and not road_trip:
        saved = ratios[BudgetCategory.INTERCITY] * OWN_VEHICLE_INTERCITY_SHIFT
        ratios[BudgetCategory.INTERCITY] -= saved
        ratios[BudgetCategory.ACTIVITY] += saved

    ratio_sum = sum(ratios.values())
    if ratio_sum > 0 and not math.isclose(ratio_sum, 1.0):
        ratios = {category: value / ratio_sum for category, value in ratios.items()}
    return ratios


def _split_envelopes(total_budget: float, ratios: Mapping[BudgetCategory, float]) -> dict[BudgetCategory, int]:
    """Round each share to whole units, then trim until the sum fits the budget."""
    cap = int(math.floor(total_budget))
    amounts = {category: max(0, round_half_up(total_budget * ratio)) for category, ratio in ratios.items()}
    order = list(ratios)

    overshoot = sum(amounts.values()) - cap
    # Largest envelope absorbs the rounding error; table order breaks ties.
    # Float products of huge budgets can overshoot by far more than one unit.
    for category in sorted(order, key=lambda category: (-amounts[category], order.index(category))):
        if overshoot <= 0:
            break
        taken = min(overshoot, amounts[category])
        amounts[category] -= taken
        overshoot -= taken
    return amounts


def allocate_budget(
    total_budget: Any,
    options: AllocationOptions | Mapping[str, Any] | None = None,
    *,
    fallback: float = 0.0,
    **overrides: Any,
) -> Allocation:
    """Split ``total_budget`` into per-category envelopes.

    Invalid budgets (negative, NaN, non-numeric) use ``fallback``. The sum of
    all envelopes never exceeds the budget, and each ``remaining`` balance
    starts equal to its envelope.
    """
    opts = _coerce_options(options, overrides)
    budget = to_amount(total_budget, default=to_amount(fallback))
    ratios = select_ratios(opts)
    amounts = _split_envelopes(budget, ratios)

    activity = amounts[BudgetCategory.ACTIVITY]
    accommodation = amounts[BudgetCategory.ACCOMMODATION]
    nights = opts.nights
    activity_per_day = round_half_up(activity / max(opts.total_days, 1))
    accommodation_per_night = round_half_up(accommodation / nights) if nights > 0 else 0

    allocation = Allocation(
        total_budget=budget,
        intercity=amounts[BudgetCategory.INTERCITY],
        accommodation=accommodation,
        local_transport=amounts[BudgetCategory.LOCAL_TRANSPORT],
        activity=activity,
        buffer=amounts[BudgetCategory.BUFFER],
        upgrade_pool=amounts.get(BudgetCategory.UPGRADE_POOL),
        activity_per_day=activity_per_day,
        accommodation_per_night=accommodation_per_night,
        meta=AllocationMeta(
            budget_tier=opts.budget_tier,
            travel_style=opts.travel_style,
            travelers=opts.travelers,
            total_days=opts.total_days,
            total_nights=nights,
            has_own_vehicle=opts.has_own_vehicle,
            ratios={category.value: round(value, 6) for category, value in ratios.items()},
        ),
    )
    allocation.remaining.update({key: float(value) for key, value in allocation.envelopes().items()})

    _LOGGER.debug(
        "budget allocated total=%s tier=%s style=%s envelopes=%s",
        budget,
        opts.budget_tier.value,
        opts.travel_style or "-",
        allocation.envelopes(),
    )
    return allocation


def deduct_from_envelope(allocation: Allocation, category: BudgetCategory | str, amount: Any) -> None:
    """Lower ``remaining`` for one category, clamping at zero.

    Over-deduction is absorbed silently so callers can test ``remaining > 0``
    before committing another segment of the same category.
    """
    key = category_key(category)
    before = allocation.remaining_for(key)
    after = allocation.deduct(key, amount)
    if after is None:
        _LOGGER.debug("deduction ignored for unknown category=%r", category)
        return
    if before - to_amount(amount) < 0:
        _LOGGER.debug("deduction clamped at zero category=%s requested=%s available=%s", key, amount, before)


def check_strict_budget(
    budget: Any,
    segments: Iterable[Segment | Mapping[str, Any]],
    new_cost: Any,
    *,
    budget_type: str = STRICT_BUDGET_TYPE,
) -> StrictBudgetCheck:
    """Decide whether one more segment fits a strict trip budget.

    Hidden-gem suggestions sit outside the budget and are not counted.
    """
    limit = to_amount(budget)
    cost = to_amount(new_cost)
    rows = [row if isinstance(row, Segment) else Segment.model_validate(row) for row in segments]
    current = sum(row.estimated_cost for row in rows if row.type != SegmentType.GEM.value)
    total_after = current + cost

    if str(budget_type or "").strip().lower() != STRICT_BUDGET_TYPE or limit <= 0:
        return StrictBudgetCheck(allowed=True, current_total=current, total_after=total_after)

    if total_after > limit:
        return StrictBudgetCheck(
            allowed=False,
            message=(
                f"Budget exceeded in strict mode. Current: {round_half_up(current)}, "
                f"Adding: {round_half_up(cost)}, Limit: {round_half_up(limit)}"
            ),
            current_total=current,
            total_after=total_after,
        )
    return StrictBudgetCheck(allowed=True, current_total=current, total_after=total_after)
