"""Pydantic domain models."""

from __future__ import annotations

import math
import threading
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

from tripbudget.domain.constants import ROAD_TRIP_STYLE
from tripbudget.domain.enums import BudgetCategory, BudgetTier, Severity, VehicleType

_TRUTHY = {"1", "true", "yes", "on", "y"}
_STYLE_ALIASES = {
    "road trip": ROAD_TRIP_STYLE,
    "road-trip": ROAD_TRIP_STYLE,
    "roadtrip": ROAD_TRIP_STYLE,
}
_TRANSPORT_PREFERENCES = {"any", "flight", "train", "bus", "car", "bike"}


def to_amount(value: Any, default: float = 0.0) -> float:
    """Coerce a loose numeric value into a finite, non-negative amount."""
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(amount) or math.isinf(amount) or amount < 0:
        return default
    return amount


def to_count(value: Any, *, default: int, minimum: int) -> int:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return max(minimum, int(number))


def normalize_budget_tier(value: Any, default: BudgetTier = BudgetTier.MID_RANGE) -> BudgetTier:
    if isinstance(value, BudgetTier):
        return value
    text = str(value or "").strip().lower().replace("_", "-")
    if text in {"midrange", "mid"}:
        text = BudgetTier.MID_RANGE.value
    try:
        return BudgetTier(text)
    except ValueError:
        return default


def normalize_travel_style(value: Any) -> str:
    text = str(value or "").strip().lower()
    return _STYLE_ALIASES.get(text, text)


def category_key(category: Any) -> str:
    return str(getattr(category, "value", category) or "").strip().lower()


def _is_truthy(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return bool(value)


class AllocationOptions(BaseModel):
    budget_tier: BudgetTier = BudgetTier.MID_RANGE
    total_days: int = 1
    total_nights: Optional[int] = None
    travelers: int = 1
    has_own_vehicle: bool = False
    travel_style: str = ""

    @field_validator("budget_tier", mode="before")
    @classmethod
    def _tier(cls, value: Any) -> BudgetTier:
        return normalize_budget_tier(value)

    @field_validator("total_days", mode="before")
    @classmethod
    def _days(cls, value: Any) -> int:
        return to_count(value, default=1, minimum=0)

    @field_validator("total_nights", mode="before")
    @classmethod
    def _nights(cls, value: Any) -> Optional[int]:
        if value is None:
            return None
        return to_count(value, default=0, minimum=0)

    @field_validator("travelers", mode="before")
    @classmethod
    def _travelers(cls, value: Any) -> int:
        return to_count(value, default=1, minimum=1)

    @field_validator("has_own_vehicle", mode="before")
    @classmethod
    def _vehicle(cls, value: Any) -> bool:
        return _is_truthy(value)

    @field_validator("travel_style", mode="before")
    @classmethod
    def _style(cls, value: Any) -> str:
        return normalize_travel_style(value)

    @property
    def nights(self) -> int:
        if self.total_nights is not None:
            return self.total_nights
        return max(self.total_days - 1, 0)


class AllocationMeta(BaseModel):
    """Inputs used to build an allocation. Audit only, never read by the math."""

    model_config = ConfigDict(frozen=True)

    budget_tier: BudgetTier = BudgetTier.MID_RANGE
    travel_style: str = ""
    travelers: int = 1
    total_days: int = 1
    total_nights: int = 0
    has_own_vehicle: bool = False
    ratios: dict[str, float] = Field(default_factory=dict)


class Allocation(BaseModel):
    """Per-category budget envelopes for one planning run.

    Envelopes and ``total_budget`` are frozen once built; ``remaining`` is the
    only mutable state and is changed through ``deduct_from_envelope``.
    """

    model_config = ConfigDict(populate_by_name=True)

    total_budget: float = Field(default=0.0, frozen=True)
    intercity: int = Field(default=0, frozen=True)
    accommodation: int = Field(default=0, frozen=True)
    local_transport: int = Field(default=0, frozen=True)
    activity: int = Field(default=0, frozen=True)
    buffer: int = Field(default=0, frozen=True)
    upgrade_pool: Optional[int] = Field(default=None, frozen=True)
    activity_per_day: int = Field(default=0, frozen=True)
    accommodation_per_night: int = Field(default=0, frozen=True)
    remaining: dict[str, float] = Field(default_factory=dict)
    meta: AllocationMeta = Field(default_factory=AllocationMeta, alias="_meta")

    _lock: Any = PrivateAttr(default_factory=threading.Lock)

    def envelopes(self) -> dict[str, int]:
        rows = {
            BudgetCategory.INTERCITY.value: self.intercity,
            BudgetCategory.ACCOMMODATION.value: self.accommodation,
            BudgetCategory.LOCAL_TRANSPORT.value: self.local_transport,
            BudgetCategory.ACTIVITY.value: self.activity,
            BudgetCategory.BUFFER.value: self.buffer,
        }
        if self.upgrade_pool is not None:
            rows[BudgetCategory.UPGRADE_POOL.value] = self.upgrade_pool
        return rows

    def envelope(self, category: BudgetCategory | str) -> Optional[int]:
        return self.envelopes().get(category_key(category))

    def remaining_for(self, category: BudgetCategory | str) -> float:
        return self.remaining.get(category_key(category), 0.0)

    def deduct(self, category: BudgetCategory | str, amount: float) -> Optional[float]:
        """Lower one remaining balance, clamped at zero. Returns the new balance."""
        key = category_key(category)
        cost = to_amount(amount)
        with self._lock:
            if key not in self.remaining:
                return None
            self.remaining[key] = max(0.0, self.remaining[key] - cost)
            return self.remaining[key]

    def allocated_total(self) -> int:
        return sum(self.envelopes().values())


class TripProfile(BaseModel):
    travel_preference: str = "any"
    own_vehicle_type: VehicleType = VehicleType.NONE
    travel_style: str = ""

    @field_validator("travel_preference", mode="before")
    @classmethod
    def _preference(cls, value: Any) -> str:
        text = str(getattr(value, "value", value) or "").strip().lower()
        return text if text in _TRANSPORT_PREFERENCES else "any"

    @field_validator("own_vehicle_type", mode="before")
    @classmethod
    def _vehicle(cls, value: Any) -> VehicleType:
        text = str(getattr(value, "value", value) or "").strip().lower()
        try:
            return VehicleType(text)
        except ValueError:
            return VehicleType.NONE

    @field_validator("travel_style", mode="before")
    @classmethod
    def _style(cls, value: Any) -> str:
        return normalize_travel_style(value)


class Segment(BaseModel):
    """An itinerary row priced by the orchestrator. Read-only for this core."""

    model_config = ConfigDict(frozen=True)

    type: str
    estimated_cost: float = 0.0
    day_number: Optional[int] = None
    order_index: float = 0.0
    title: str = ""
    location: str = ""
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("type", mode="before")
    @classmethod
    def _type(cls, value: Any) -> str:
        raw = getattr(value, "value", value)
        return str(raw or "").strip().lower()

    @field_validator("estimated_cost", mode="before")
    @classmethod
    def _cost(cls, value: Any) -> float:
        return to_amount(value)


class CategoryViolation(BaseModel):
    category: str
    spent: float
    envelope: int
    overshoot: float


class ReconciliationResult(BaseModel):
    budget: float = 0.0
    total: float = 0.0
    category_totals: dict[str, float] = Field(default_factory=dict)
    overshoot: float = 0.0
    buffer_remaining: float = 0.0
    category_violations: list[CategoryViolation] = Field(default_factory=list)
    balanced: bool = True


class ValidationIssue(BaseModel):
    code: str
    severity: Severity = Severity.MEDIUM
    message: str = ""
    category: Optional[str] = None
    suggestions: list[str] = Field(default_factory=list)


class StrictBudgetCheck(BaseModel):
    allowed: bool = True
    message: str = ""
    current_total: float = 0.0
    total_after: float = 0.0


class DestinationStop(BaseModel):
    location: str
    days: int = 1

    @field_validator("days", mode="before")
    @classmethod
    def _days(cls, value: Any) -> int:
        return to_count(value, default=0, minimum=0)


class TripPlanRequest(BaseModel):
    budget: float = 0.0
    currency: Optional[str] = None
    budget_tier: Optional[BudgetTier] = None
    budget_type: str = "flexible"
    travel_style: str = ""
    travelers: int = 1
    start_location: str = ""
    return_location: Optional[str] = None
    stops: list[DestinationStop] = Field(default_factory=list)
    travel_preference: str = "any"
    own_vehicle_type: VehicleType = VehicleType.NONE

    @field_validator("budget", mode="before")
    @classmethod
    def _budget(cls, value: Any) -> float:
        return to_amount(value)

    @field_validator("currency", mode="before")
    @classmethod
    def _currency(cls, value: Any) -> Optional[str]:
        text = str(value or "").strip().upper()
        return text or None

    @field_validator("budget_tier", mode="before")
    @classmethod
    def _tier(cls, value: Any) -> Optional[BudgetTier]:
        if value is None or str(value).strip() == "":
            return None
        return normalize_budget_tier(value)

    @field_validator("budget_type", mode="before")
    @classmethod
    def _budget_type(cls, value: Any) -> str:
        return str(value or "flexible").strip().lower()

    @field_validator("travel_style", mode="before")
    @classmethod
    def _style(cls, value: Any) -> str:
        return normalize_travel_style(value)

    @field_validator("travelers", mode="before")
    @classmethod
    def _travelers(cls, value: Any) -> int:
        return to_count(value, default=1, minimum=1)

    @field_validator("own_vehicle_type", mode="before")
    @classmethod
    def _vehicle(cls, value: Any) -> VehicleType:
        text = str(getattr(value, "value", value) or "").strip().lower()
        try:
            return VehicleType(text)
        except ValueError:
            return VehicleType.NONE

    @property
    def total_days(self) -> int:
        return sum(stop.days for stop in self.stops)

    @property
    def has_own_vehicle(self) -> bool:
        return self.own_vehicle_type != VehicleType.NONE

    def profile(self) -> TripProfile:
        return TripProfile(
            travel_preference=self.travel_preference,
            own_vehicle_type=self.own_vehicle_type,
            travel_style=self.travel_style,
        )


class DailyCost(BaseModel):
    day_number: int
    activity_cost: float = 0.0
    local_transport_cost: float = 0.0
    travel_cost: float = 0.0
    stay_cost: float = 0.0
    total_day_cost: float = 0.0
    segment_count: int = 0


class TripBudgetPlan(BaseModel):
    allocation: Allocation
    segments: list[Segment] = Field(default_factory=list)
    daily_summary: list[DailyCost] = Field(default_factory=list)
    reconciliation: ReconciliationResult = Field(default_factory=ReconciliationResult)
    issues: list[ValidationIssue] = Field(default_factory=list)
    removed_segments: list[Segment] = Field(default_factory=list)
    trace_id: str = ""
