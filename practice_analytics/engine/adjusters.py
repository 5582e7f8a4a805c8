"""Apply a location adjustment profile to reference series and entity lists.

Each function is a pure transformation: inputs are never mutated, every
adjusted item is a new frozen instance. Clamp bounds keep derived ratios
plausible regardless of how extreme a profile's factors are.
"""

from __future__ import annotations

import math
from dataclasses import replace
from typing import Iterable

from practice_analytics.engine.profiles import LocationAdjustmentProfile
from practice_analytics.models.reference import (
    CollectionRiskEntry,
    ServiceMixEntry,
    StaffPerformanceEntry,
    TimeSeriesPoint,
)

SERIES_MARGIN_BOUNDS = (0.38, 0.68)
SERIES_PRIVATE_SHARE_BOUNDS = (0.24, 0.72)
SERVICE_MARGIN_BOUNDS = (0.30, 0.75)
SERVICE_DELTA_BOUNDS = (-0.10, 0.20)
STAFF_CONVERSION_BOUNDS = (0.40, 0.85)
STAFF_SATISFACTION_BOUNDS = (3.80, 4.95)
STAFF_RANK_DECAY = 0.05


def clamp(value: float, lower: float, upper: float) -> float:
    return min(upper, max(lower, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward positive infinity."""
    return math.floor(value + 0.5)


def adjust_series(
    series: Iterable[TimeSeriesPoint], profile: LocationAdjustmentProfile
) -> list[TimeSeriesPoint]:
    return [
        replace(
            point,
            revenue=round_half_up(point.revenue * profile.revenue_factor),
            margin=clamp(point.margin + profile.margin_delta, *SERIES_MARGIN_BOUNDS),
            private_share=clamp(
                point.private_share + profile.private_delta,
                *SERIES_PRIVATE_SHARE_BOUNDS,
            ),
            new_patients=round_half_up(point.new_patients * profile.patients_factor),
            avg_basket=round_half_up(point.avg_basket * profile.avg_basket_factor),
        )
        for point in series
    ]


def adjust_service_mix(
    entries: Iterable[ServiceMixEntry], profile: LocationAdjustmentProfile
) -> list[ServiceMixEntry]:
    return [
        replace(
            entry,
            revenue=round_half_up(entry.revenue * profile.revenue_factor),
            margin=clamp(entry.margin + profile.margin_delta, *SERVICE_MARGIN_BOUNDS),
            delta=clamp(entry.delta + profile.margin_delta / 2, *SERVICE_DELTA_BOUNDS),
        )
        for entry in entries
    ]


def adjust_staff_performance(
    entries: Iterable[StaffPerformanceEntry], profile: LocationAdjustmentProfile
) -> list[StaffPerformanceEntry]:
    """Adjust the staff roster; later roster positions get a smaller revenue share."""
    adjusted: list[StaffPerformanceEntry] = []
    for rank, entry in enumerate(entries):
        role_factor = 1 - rank * STAFF_RANK_DECAY
        adjusted.append(
            replace(
                entry,
                revenue=round_half_up(entry.revenue * profile.revenue_factor * role_factor),
                conversion_rate=clamp(
                    entry.conversion_rate + profile.margin_delta / 2,
                    *STAFF_CONVERSION_BOUNDS,
                ),
                satisfaction=clamp(
                    entry.satisfaction + profile.private_delta * 10,
                    *STAFF_SATISFACTION_BOUNDS,
                ),
            )
        )
    return adjusted


def adjust_collection_risks(
    entries: Iterable[CollectionRiskEntry], profile: LocationAdjustmentProfile
) -> list[CollectionRiskEntry]:
    return [
        replace(entry, open_amount=round_half_up(entry.open_amount * profile.collection_factor))
        for entry in entries
    ]
