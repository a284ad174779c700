"""Deterministic distance-tier and driving-time estimation."""

from __future__ import annotations

import logging
import math

from tripbudget.data.places import get_place_coords
from tripbudget.domain.constants import (
    AVERAGE_DRIVING_SPEED_KMH,
    DEFAULT_DISTANCE_TIER,
    FALLBACK_KM_ESTIMATE,
    KM_ESTIMATES,
    TIER_THRESHOLDS_KM,
)
from tripbudget.domain.enums import DistanceTier

_LOGGER = logging.getLogger("trip-budget.distance")


def haversine(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    radius_km = 6371.0
    dlat = math.radians(lat2 - lat1)
    dlon = math.radians(lon2 - lon1)
    a = (
        math.sin(dlat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(dlon / 2) ** 2
    )
    return radius_km * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def tier_for_distance(distance_km: float) -> DistanceTier:
    for tier, upper_km in TIER_THRESHOLDS_KM:
        if distance_km < upper_km:
            return tier
    return DistanceTier.LONG


def estimate_distance_tier(origin: str, destination: str) -> DistanceTier:
    """Bucket the great-circle distance between two place names.

    Unknown places fall back to ``DEFAULT_DISTANCE_TIER`` instead of failing.
    """
    origin_coords = get_place_coords(origin)
    destination_coords = get_place_coords(destination)
    if origin_coords is None or destination_coords is None:
        _LOGGER.debug(
            "distance tier fallback origin=%r destination=%r tier=%s",
            origin,
            destination,
            DEFAULT_DISTANCE_TIER.value,
        )
        return DEFAULT_DISTANCE_TIER

    distance_km = haversine(
        origin_coords.lat,
        origin_coords.lng,
        destination_coords.lat,
        destination_coords.lng,
    )
    return tier_for_distance(distance_km)


def tier_distance_km(tier: DistanceTier | str) -> float:
    """Representative road distance for a tier."""
    try:
        return KM_ESTIMATES[DistanceTier(getattr(tier, "value", tier))]
    except (TypeError, ValueError):
        return FALLBACK_KM_ESTIMATE


def estimate_driving_time(distance_km: float) -> float:
    """Hours at the fixed average driving speed; bad input counts as 0 km."""
    try:
        km = float(distance_km)
    except (TypeError, ValueError):
        return 0.0
    if math.isnan(km) or km <= 0:
        return 0.0
    return km / AVERAGE_DRIVING_SPEED_KMH


def tier_driving_hours(tier: DistanceTier | str) -> float:
    return estimate_driving_time(tier_distance_km(tier))
