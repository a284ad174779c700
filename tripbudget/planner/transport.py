"""Transport mode decision rules and lookup-table pricing."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, Optional

from tripbudget.data.currency import currency_multiplier
from tripbudget.domain.constants import (
    ACCOMMODATION_PER_NIGHT,
    FLAT_FARES,
    LOCAL_TRANSPORT_PER_DAY,
    NO_FLIGHT_BELOW_DRIVE_HOURS,
    OWN_VEHICLE_MAX_DRIVE_HOURS,
    PER_KM_RATES,
    ROAD_TRIP_STYLE,
)
from tripbudget.domain.enums import BudgetTier, DistanceTier, TransportMode, VehicleType
from tripbudget.domain.models import TripProfile, normalize_budget_tier, to_count
from tripbudget.planner.budget import round_half_up
from tripbudget.planner.distance import tier_distance_km, tier_driving_hours

_LOGGER = logging.getLogger("trip-budget.transport")

_VEHICLE_MODES = {
    VehicleType.CAR: TransportMode.CAR,
    VehicleType.BIKE: TransportMode.BIKE,
}
_ROAD_TRIP_GROUND_MODES = {
    DistanceTier.LOCAL: TransportMode.BUS,
    DistanceTier.SHORT: TransportMode.TRAIN,
    DistanceTier.MEDIUM: TransportMode.TRAIN,
    DistanceTier.LONG: TransportMode.TRAIN,
}
_SHORT_HOP_MODES = {
    DistanceTier.LOCAL: TransportMode.BUS,
}


@dataclass(frozen=True)
class TransportRule:
    name: str
    apply: Callable[[TripProfile, str, float], Optional[TransportMode]]


def _road_trip(trip: TripProfile, tier: str, hours: float) -> Optional[TransportMode]:
    if trip.travel_style != ROAD_TRIP_STYLE:
        return None
    vehicle_mode = _VEHICLE_MODES.get(trip.own_vehicle_type)
    if vehicle_mode is not None:
        return vehicle_mode
    return _ROAD_TRIP_GROUND_MODES.get(tier, TransportMode.TRAIN)


def _own_vehicle(trip: TripProfile, tier: str, hours: float) -> Optional[TransportMode]:
    vehicle_mode = _VEHICLE_MODES.get(trip.own_vehicle_type)
    if vehicle_mode is None or hours >= OWN_VEHICLE_MAX_DRIVE_HOURS:
        return None
    return vehicle_mode


def _explicit_preference(trip: TripProfile, tier: str, hours: float) -> Optional[TransportMode]:
    if trip.travel_preference == "any":
        return None
    preferred = TransportMode(trip.travel_preference)
    # Flying a trip that drives in under the guard is wasteful.
    if preferred == TransportMode.FLIGHT and hours < NO_FLIGHT_BELOW_DRIVE_HOURS:
        return TransportMode.TRAIN
    return preferred


def _tier_default(trip: TripProfile, tier: str, hours: float) -> Optional[TransportMode]:
    if hours >= NO_FLIGHT_BELOW_DRIVE_HOURS:
        return TransportMode.FLIGHT
    return _SHORT_HOP_MODES.get(tier, TransportMode.TRAIN)


# Evaluated top to bottom; the first rule returning a mode wins.
# tier_default always returns a mode, so the table is total.
TRANSPORT_RULES: tuple[TransportRule, ...] = (
    TransportRule("road_trip", _road_trip),
    TransportRule("own_vehicle", _own_vehicle),
    TransportRule("explicit_preference", _explicit_preference),
    TransportRule("tier_default", _tier_default),
)


def _coerce_trip(trip: TripProfile | Mapping[str, Any] | None) -> TripProfile:
    if isinstance(trip, TripProfile):
        return trip
    return TripProfile.model_validate(dict(trip or {}))


def decide_transport_mode(
    trip: TripProfile | Mapping[str, Any] | None,
    tier: DistanceTier | str,
) -> TransportMode:
    profile = _coerce_trip(trip)
    tier_value = str(getattr(tier, "value", tier) or "").strip().lower()
    hours = tier_driving_hours(tier_value)

    for rule in TRANSPORT_RULES:
        mode = rule.apply(profile, tier_value, hours)
        if mode is not None:
            break
    _LOGGER.debug("transport mode=%s rule=%s tier=%s hours=%.2f", mode.value, rule.name, tier_value, hours)
    return mode


def _per_person_cost(base_cost: float, currency: str | None) -> int:
    # Round per person so totals scale exactly with traveller count.
    return max(1, round_half_up(base_cost * currency_multiplier(currency)))


def calculate_transport_cost(
    mode: TransportMode | str,
    tier: DistanceTier | str,
    travelers: Any = 1,
    currency: str | None = "USD",
) -> int:
    """Price one leg for the whole party; always at least one unit per person."""
    mode_value = str(getattr(mode, "value", mode) or "").strip().lower()
    tier_value = str(getattr(tier, "value", tier) or "").strip().lower()
    party = to_count(travelers, default=1, minimum=1)

    if mode_value in PER_KM_RATES:
        base_cost = tier_distance_km(tier_value) * PER_KM_RATES[mode_value]
    else:
        fares = FLAT_FARES.get(mode_value, FLAT_FARES[TransportMode.TRAIN])
        base_cost = fares.get(tier_value, fares[DistanceTier.MEDIUM])

    return _per_person_cost(base_cost, currency) * party


def calculate_accommodation_cost(budget_tier: BudgetTier | str, currency: str | None = "USD") -> int:
    """Nightly stay cost for one room."""
    tier = normalize_budget_tier(budget_tier)
    return _per_person_cost(ACCOMMODATION_PER_NIGHT[tier], currency)


def calculate_local_transport_cost(budget_tier: BudgetTier | str, currency: str | None = "USD") -> int:
    """Per-day local commute cost."""
    tier = normalize_budget_tier(budget_tier)
    return _per_person_cost(LOCAL_TRANSPORT_PER_DAY[tier], currency)
