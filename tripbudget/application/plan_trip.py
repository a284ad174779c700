"""Single entrypoint for trip budget planning."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Optional

from tripbudget.config.settings import PlannerSettings, resolve_planner_settings
from tripbudget.domain.models import (
    AllocationOptions,
    Segment,
    TripBudgetPlan,
    TripPlanRequest,
)
from tripbudget.infrastructure.logging import StructuredLogger
from tripbudget.planner.budget import STRICT_BUDGET_TYPE, allocate_budget, check_strict_budget, deduct_from_envelope
from tripbudget.planner.logistics import build_logistics_segments, segment_category
from tripbudget.repair.strategies import clamp_activity_costs, scale_activity_costs, trim_overshoot
from tripbudget.services.cost_summary import compute_daily_summary
from tripbudget.validators.budget_validator import reconcile_budget, validate_reconciliation


def _as_segment(row: Segment | Mapping[str, Any]) -> Segment:
    if isinstance(row, Segment):
        return row
    return Segment.model_validate(row)


def plan_trip_budget(
    request: TripPlanRequest | Mapping[str, Any],
    activities: Iterable[Segment | Mapping[str, Any]] = (),
    *,
    settings: Optional[PlannerSettings] = None,
    logger: Optional[StructuredLogger] = None,
) -> TripBudgetPlan:
    """Allocate, price logistics, fold in supplied segments and reconcile.

    ``activities`` are segments priced by the caller (usually activities);
    they are deducted from whichever envelope their type maps to.
    """
    req = request if isinstance(request, TripPlanRequest) else TripPlanRequest.model_validate(request)
    cfg = settings or resolve_planner_settings()
    log = logger or StructuredLogger()
    currency = req.currency or cfg.default_currency
    tier = req.budget_tier or cfg.default_budget_tier
    total_days = req.total_days

    log.phase_start("allocate", budget=req.budget, budget_tier=tier.value, travel_style=req.travel_style)
    allocation = allocate_budget(
        req.budget,
        AllocationOptions(
            budget_tier=tier,
            total_days=total_days,
            travelers=req.travelers,
            has_own_vehicle=req.has_own_vehicle,
            travel_style=req.travel_style,
        ),
    )
    log.phase_end("allocate", envelopes=allocation.envelopes())

    if req.budget <= 0:
        log.warning("allocate", "budget is zero or negative, returning an empty plan")
        reconciliation = reconcile_budget(allocation, [])
        log.summary(balanced=reconciliation.balanced, total=0.0, budget=0.0, segments=0)
        return TripBudgetPlan(allocation=allocation, reconciliation=reconciliation, trace_id=log.trace_id)

    log.phase_start("logistics", currency=currency)
    segments = build_logistics_segments(req, allocation, currency=currency, budget_tier=tier)
    log.phase_end("logistics", segments=len(segments))

    log.phase_start("activities")
    supplied = clamp_activity_costs([_as_segment(row) for row in activities], tier, currency)
    if cfg.scale_activities:
        supplied = scale_activity_costs(supplied, allocation.activity)

    accepted: list[Segment] = []
    rejected: list[Segment] = []
    for seg in supplied:
        if req.budget_type == STRICT_BUDGET_TYPE:
            check = check_strict_budget(req.budget, segments + accepted, seg.estimated_cost, budget_type=req.budget_type)
            if not check.allowed:
                log.warning("activities", check.message, title=seg.title)
                rejected.append(seg)
                continue
        accepted.append(seg)
        category = segment_category(seg.type)
        if category is not None:
            deduct_from_envelope(allocation, category, seg.estimated_cost)
    segments.extend(accepted)
    log.phase_end("activities", accepted=len(accepted), rejected=len(rejected))

    log.phase_start("reconcile")
    reconciliation = reconcile_budget(allocation, segments)
    removed = list(rejected)
    if cfg.auto_correct and not reconciliation.balanced and reconciliation.overshoot > 0:
        log.warning("reconcile", "budget overshoot detected, trimming segments", overshoot=reconciliation.overshoot)
        segments, trimmed = trim_overshoot(segments, reconciliation.overshoot)
        removed.extend(trimmed)
        reconciliation = reconcile_budget(allocation, segments)
    log.phase_end("reconcile", balanced=reconciliation.balanced, removed=len(removed))

    issues = validate_reconciliation(reconciliation)
    segments.sort(key=lambda seg: (seg.day_number or 0, seg.order_index))
    daily_summary = compute_daily_summary(segments, total_days)

    log.summary(
        balanced=reconciliation.balanced,
        total=reconciliation.total,
        budget=reconciliation.budget,
        overshoot=reconciliation.overshoot,
        segments=len(segments),
        issues=[issue.code for issue in issues],
    )
    return TripBudgetPlan(
        allocation=allocation,
        segments=segments,
        daily_summary=daily_summary,
        reconciliation=reconciliation,
        issues=issues,
        removed_segments=removed,
        trace_id=log.trace_id,
    )
