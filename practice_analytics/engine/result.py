"""Immutable snapshot result data structures."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import date
from typing import Any

from practice_analytics.models.reference import (
    CollectionRiskEntry,
    ServiceMixEntry,
    StaffPerformanceEntry,
    TimeSeriesPoint,
)


@dataclass(frozen=True)
class PreviousMetrics:
    """Aggregates over the comparison period."""

    total_revenue: float
    margin_rate: float
    new_patients: int
    avg_basket: float
    private_share: float


@dataclass(frozen=True)
class Metrics:
    """Aggregates over the selected period."""

    total_revenue: float
    revenue_delta: float
    margin_rate: float
    new_patients: int
    avg_basket: float
    private_share: float


@dataclass(frozen=True)
class ForecastPoint:
    """Single projected month. Values are unrounded estimates, not actuals."""

    date: date
    projected_revenue: float
    projected_margin: float


@dataclass(frozen=True)
class Snapshot:
    """Complete computed result for one (timeframe, location) selection."""

    metrics: Metrics
    previous_metrics: PreviousMetrics
    time_series: list[TimeSeriesPoint]
    previous_series: list[TimeSeriesPoint]
    service_mix: list[ServiceMixEntry]
    staff_performance: list[StaffPerformanceEntry]
    collection_risks: list[CollectionRiskEntry]
    forecast: list[ForecastPoint]

    def to_dict(self) -> dict[str, Any]:
        """Plain-dict form for JSON responses; dates stay ``date`` objects."""
        return asdict(self)
