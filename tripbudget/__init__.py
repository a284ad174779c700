"""Trip budget planning core: envelopes, transport decisions, reconciliation."""

from tripbudget.application.plan_trip import plan_trip_budget
from tripbudget.planner.budget import allocate_budget, check_strict_budget, deduct_from_envelope
from tripbudget.planner.distance import estimate_distance_tier, estimate_driving_time
from tripbudget.planner.logistics import build_logistics_segments
from tripbudget.planner.transport import (
    calculate_accommodation_cost,
    calculate_local_transport_cost,
    calculate_transport_cost,
    decide_transport_mode,
)
from tripbudget.validators.budget_validator import reconcile_budget, validate_reconciliation

__all__ = [
    "allocate_budget",
    "build_logistics_segments",
    "calculate_accommodation_cost",
    "calculate_local_transport_cost",
    "calculate_transport_cost",
    "check_strict_budget",
    "decide_transport_mode",
    "deduct_from_envelope",
    "estimate_distance_tier",
    "estimate_driving_time",
    "plan_trip_budget",
    "reconcile_budget",
    "validate_reconciliation",
]
