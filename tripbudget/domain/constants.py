"""Domain constants shared by deterministic logic."""

from tripbudget.domain.enums import BudgetCategory, BudgetTier, DistanceTier, SegmentType, TransportMode

ROAD_TRIP_STYLE = "road_trip"

# Envelope ratio tables. Each table sums to 1.0.
DEFAULT_RATIOS = {
    BudgetCategory.INTERCITY: 0.20,
    BudgetCategory.ACCOMMODATION: 0.30,
    BudgetCategory.LOCAL_TRANSPORT: 0.05,
    BudgetCategory.ACTIVITY: 0.37,
    BudgetCategory.BUFFER: 0.08,
}

BUDGET_TIER_RATIOS = {
    BudgetTier.BUDGET: {
        BudgetCategory.INTERCITY: 0.18,
        BudgetCategory.ACCOMMODATION: 0.25,
        BudgetCategory.LOCAL_TRANSPORT: 0.07,
        BudgetCategory.ACTIVITY: 0.38,
        BudgetCategory.BUFFER: 0.12,
    },
    BudgetTier.MID_RANGE: DEFAULT_RATIOS,
    BudgetTier.LUXURY: {
        BudgetCategory.INTERCITY: 0.22,
        BudgetCategory.ACCOMMODATION: 0.35,
        BudgetCategory.LOCAL_TRANSPORT: 0.03,
        BudgetCategory.ACTIVITY: 0.30,
        BudgetCategory.BUFFER: 0.05,
        BudgetCategory.UPGRADE_POOL: 0.05,
    },
}

# Own vehicle: mostly fuel, flexible lodging, money moves to experiences.
ROAD_TRIP_RATIOS = {
    BudgetCategory.INTERCITY: 0.10,
    BudgetCategory.ACCOMMODATION: 0.20,
    BudgetCategory.LOCAL_TRANSPORT: 0.03,
    BudgetCategory.ACTIVITY: 0.55,
    BudgetCategory.BUFFER: 0.12,
}

OWN_VEHICLE_INTERCITY_SHIFT = 0.5

# Distance tiers
DEFAULT_DISTANCE_TIER = DistanceTier.SHORT

# Upper bound (exclusive, great-circle km) for each tier below LONG.
TIER_THRESHOLDS_KM = (
    (DistanceTier.LOCAL, 50.0),
    (DistanceTier.SHORT, 600.0),
    (DistanceTier.MEDIUM, 2000.0),
)

# Representative road distance per tier.
KM_ESTIMATES = {
    DistanceTier.LOCAL: 20.0,
    DistanceTier.SHORT: 300.0,
    DistanceTier.MEDIUM: 1000.0,
    DistanceTier.LONG: 3000.0,
}
FALLBACK_KM_ESTIMATE = 500.0

AVERAGE_DRIVING_SPEED_KMH = 60.0
OWN_VEHICLE_MAX_DRIVE_HOURS = 6.0
NO_FLIGHT_BELOW_DRIVE_HOURS = 5.0

# Base costs in USD, converted with the currency multiplier.
FLAT_FARES = {
    TransportMode.FLIGHT: {
        DistanceTier.LOCAL: 60.0,
        DistanceTier.SHORT: 80.0,
        DistanceTier.MEDIUM: 150.0,
        DistanceTier.LONG: 300.0,
    },
    TransportMode.TRAIN: {
        DistanceTier.LOCAL: 5.0,
        DistanceTier.SHORT: 15.0,
        DistanceTier.MEDIUM: 40.0,
        DistanceTier.LONG: 80.0,
    },
    TransportMode.BUS: {
        DistanceTier.LOCAL: 3.0,
        DistanceTier.SHORT: 8.0,
        DistanceTier.MEDIUM: 20.0,
        DistanceTier.LONG: 45.0,
    },
}

PER_KM_RATES = {
    TransportMode.CAR: 0.08,
    TransportMode.BIKE: 0.03,
}

ACCOMMODATION_PER_NIGHT = {
    BudgetTier.BUDGET: 15.0,
    BudgetTier.MID_RANGE: 60.0,
    BudgetTier.LUXURY: 200.0,
}

LOCAL_TRANSPORT_PER_DAY = {
    BudgetTier.BUDGET: 5.0,
    BudgetTier.MID_RANGE: 15.0,
    BudgetTier.LUXURY: 40.0,
}

# Per-activity ceiling, in the trip currency.
ACTIVITY_COST_CAPS = {
    BudgetTier.BUDGET: 500,
    BudgetTier.MID_RANGE: 2000,
    BudgetTier.LUXURY: 8000,
}

# Segment type -> owning envelope
SEGMENT_CATEGORY = {
    SegmentType.OUTBOUND_TRAVEL: BudgetCategory.INTERCITY,
    SegmentType.RETURN_TRAVEL: BudgetCategory.INTERCITY,
    SegmentType.INTERCITY_TRAVEL: BudgetCategory.INTERCITY,
    SegmentType.ACCOMMODATION: BudgetCategory.ACCOMMODATION,
    SegmentType.LOCAL_TRANSPORT: BudgetCategory.LOCAL_TRANSPORT,
    SegmentType.ACTIVITY: BudgetCategory.ACTIVITY,
}

RECONCILED_CATEGORIES = (
    BudgetCategory.INTERCITY,
    BudgetCategory.ACCOMMODATION,
    BudgetCategory.LOCAL_TRANSPORT,
    BudgetCategory.ACTIVITY,
)

TRAVEL_SEGMENT_TYPES = frozenset(
    {SegmentType.OUTBOUND_TRAVEL, SegmentType.RETURN_TRAVEL, SegmentType.INTERCITY_TRAVEL}
)
LOGISTICS_SEGMENT_TYPES = TRAVEL_SEGMENT_TYPES | {SegmentType.LOCAL_TRANSPORT, SegmentType.ACCOMMODATION}

# Least essential first.
TRIMMABLE_SEGMENT_TYPES = (SegmentType.LOCAL_TRANSPORT, SegmentType.ACTIVITY)

SEGMENT_TYPE_LABELS = {
    SegmentType.OUTBOUND_TRAVEL: "Travel",
    SegmentType.RETURN_TRAVEL: "Return",
    SegmentType.INTERCITY_TRAVEL: "Intercity Travel",
    SegmentType.LOCAL_TRANSPORT: "Local Transport",
    SegmentType.ACCOMMODATION: "Accommodation",
    SegmentType.ACTIVITY: "Activity",
    SegmentType.FOOD: "Food & Dining",
}

MODE_LABELS = {
    TransportMode.FLIGHT: "Flight",
    TransportMode.TRAIN: "Train",
    TransportMode.BUS: "Bus",
    TransportMode.CAR: "Drive",
    TransportMode.BIKE: "Ride",
}

# order_index anchors for logistics rows inside a day
ORDER_OUTBOUND = -2
ORDER_LOCAL_TRANSPORT = -1
ORDER_ACCOMMODATION = 998
ORDER_INTERCITY = 999
ORDER_RETURN = 1000
