"""Per-day cost rollups for presentation layers."""

from __future__ import annotations

from collections.abc import Iterable

from tripbudget.domain.constants import TRAVEL_SEGMENT_TYPES
from tripbudget.domain.enums import SegmentType
from tripbudget.domain.models import DailyCost, Segment


def compute_daily_summary(segments: Iterable[Segment], total_days: int) -> list[DailyCost]:
    rows = list(segments)
    summary: list[DailyCost] = []
    for day in range(1, max(int(total_days), 0) + 1):
        day_rows = [seg for seg in rows if seg.day_number == day]
        activity = sum(s.estimated_cost for s in day_rows if s.type == SegmentType.ACTIVITY.value)
        local = sum(s.estimated_cost for s in day_rows if s.type == SegmentType.LOCAL_TRANSPORT.value)
        travel = sum(s.estimated_cost for s in day_rows if s.type in TRAVEL_SEGMENT_TYPES)
        stay = sum(s.estimated_cost for s in day_rows if s.type == SegmentType.ACCOMMODATION.value)
        summary.append(
            DailyCost(
                day_number=day,
                activity_cost=round(activity, 2),
                local_transport_cost=round(local, 2),
                travel_cost=round(travel, 2),
                stay_cost=round(stay, 2),
                total_day_cost=round(activity + local + travel + stay, 2),
                segment_count=len(day_rows),
            )
        )
    return summary
