"""Repair strategies for budget overshoot."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from tripbudget.domain.constants import ACTIVITY_COST_CAPS, TRIMMABLE_SEGMENT_TYPES
from tripbudget.domain.enums import BudgetTier, SegmentType
from tripbudget.domain.models import Segment, normalize_budget_tier, to_amount

_LOGGER = logging.getLogger("trip-budget.repair")


def trim_overshoot(segments: Sequence[Segment], overshoot: float) -> tuple[list[Segment], list[Segment]]:
    """Drop non-essential segments until their cost covers ``overshoot``.

    Local transport goes first, then activities, cheapest first within each
    type. Travel legs and stays are never removed.
    """
    remaining = to_amount(overshoot)
    rows = list(segments)
    removed_idx: list[int] = []

    for segment_type in TRIMMABLE_SEGMENT_TYPES:
        if remaining <= 0:
            break
        candidates = sorted(
            (idx for idx, seg in enumerate(rows) if seg.type == segment_type),
            key=lambda idx: rows[idx].estimated_cost,
        )
        for idx in candidates:
            if remaining <= 0:
                break
            remaining -= rows[idx].estimated_cost
            removed_idx.append(idx)

    dropped = set(removed_idx)
    kept = [seg for idx, seg in enumerate(rows) if idx not in dropped]
    removed = [rows[idx] for idx in removed_idx]
    if removed:
        _LOGGER.info(
            "trimmed %d segments covering %.2f of overshoot %.2f",
            len(removed),
            sum(seg.estimated_cost for seg in removed),
            to_amount(overshoot),
        )
    return kept, removed


def scale_activity_costs(segments: Sequence[Segment], activity_envelope: float) -> list[Segment]:
    """Shrink activity costs proportionally so they fit the activity envelope."""
    envelope = to_amount(activity_envelope)
    activity_total = sum(seg.estimated_cost for seg in segments if seg.type == SegmentType.ACTIVITY.value)
    if envelope <= 0 or activity_total <= envelope:
        return list(segments)

    factor = envelope / activity_total
    _LOGGER.warning(
        "activity overshoot %.2f > %.2f, scaling by %.3f",
        activity_total,
        envelope,
        factor,
    )
    scaled: list[Segment] = []
    for seg in segments:
        if seg.type != SegmentType.ACTIVITY.value:
            scaled.append(seg)
            continue
        # Floor keeps the scaled sum inside the envelope.
        scaled.append(seg.model_copy(update={"estimated_cost": float(int(seg.estimated_cost * factor))}))
    return scaled


def clamp_activity_costs(
    segments: Sequence[Segment],
    budget_tier: BudgetTier | str,
    currency: str | None = "USD",
) -> list[Segment]:
    """Cap each activity at the per-activity ceiling of its budget tier.

    Caps are absolute amounts in the trip currency; unknown tiers use the
    mid-range cap.
    """
    cap = ACTIVITY_COST_CAPS[normalize_budget_tier(budget_tier)]
    clamped: list[Segment] = []
    for seg in segments:
        if seg.type != SegmentType.ACTIVITY.value or seg.estimated_cost <= cap:
            clamped.append(seg)
            continue
        _LOGGER.warning(
            "clamped activity %r: %s%.0f -> %s%d",
            seg.title,
            currency or "",
            seg.estimated_cost,
            currency or "",
            cap,
        )
        clamped.append(seg.model_copy(update={"estimated_cost": float(cap)}))
    return clamped
