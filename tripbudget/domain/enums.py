"""Domain enums."""

from enum import Enum


class DistanceTier(str, Enum):
    LOCAL = "local"
    SHORT = "short"
    MEDIUM = "medium"
    LONG = "long"


class TransportMode(str, Enum):
    FLIGHT = "flight"
    TRAIN = "train"
    BUS = "bus"
    CAR = "car"
    BIKE = "bike"


class VehicleType(str, Enum):
    NONE = "none"
    CAR = "car"
    BIKE = "bike"


class BudgetTier(str, Enum):
    BUDGET = "budget"
    MID_RANGE = "mid-range"
    LUXURY = "luxury"


class BudgetCategory(str, Enum):
    INTERCITY = "intercity"
    ACCOMMODATION = "accommodation"
    LOCAL_TRANSPORT = "local_transport"
    ACTIVITY = "activity"
    BUFFER = "buffer"
    UPGRADE_POOL = "upgrade_pool"


class SegmentType(str, Enum):
    OUTBOUND_TRAVEL = "outbound_travel"
    RETURN_TRAVEL = "return_travel"
    INTERCITY_TRAVEL = "intercity_travel"
    ACCOMMODATION = "accommodation"
    ACTIVITY = "activity"
    LOCAL_TRANSPORT = "local_transport"
    FOOD = "food"
    GEM = "gem"


class Severity(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
