"""Runtime planner settings resolved from the environment."""

from __future__ import annotations

import os

from pydantic import BaseModel, Field

from tripbudget.data.currency import DEFAULT_CURRENCY
from tripbudget.domain.enums import BudgetTier
from tripbudget.domain.models import normalize_budget_tier

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


def _flag(name: str, default: bool) -> bool:
    raw = str(os.getenv(name) or "").strip().lower()
    if raw in _TRUTHY:
        return True
    if raw in _FALSY:
        return False
    return default


def resolve_default_currency() -> str:
    code = str(os.getenv("TRIP_DEFAULT_CURRENCY") or "").strip().upper()
    return code or DEFAULT_CURRENCY


def resolve_default_budget_tier() -> BudgetTier:
    return normalize_budget_tier(os.getenv("TRIP_DEFAULT_BUDGET_TIER"))


def auto_correct_enabled() -> bool:
    return _flag("TRIP_AUTO_CORRECT", True)


def scale_activities_enabled() -> bool:
    return _flag("TRIP_SCALE_ACTIVITIES", True)


class PlannerSettings(BaseModel):
    default_currency: str = Field(default=DEFAULT_CURRENCY)
    default_budget_tier: BudgetTier = Field(default=BudgetTier.MID_RANGE)
    auto_correct: bool = Field(default=True)
    scale_activities: bool = Field(default=True)


def resolve_planner_settings() -> PlannerSettings:
    return PlannerSettings(
        default_currency=resolve_default_currency(),
        default_budget_tier=resolve_default_budget_tier(),
        auto_correct=auto_correct_enabled(),
        scale_activities=scale_activities_enabled(),
    )


__all__ = [
    "PlannerSettings",
    "resolve_planner_settings",
]
