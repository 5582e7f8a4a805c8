"""Core snapshot engine.

Takes a (timeframe, location) selection plus reference data -> produces a
Snapshot with current metrics, prior-period comparison, adjusted entity
lists and a forecast.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from practice_analytics.engine.adjusters import (
    adjust_collection_risks,
    adjust_series,
    adjust_service_mix,
    adjust_staff_performance,
)
from practice_analytics.engine.forecast import build_forecast
from practice_analytics.engine.profiles import get_profile
from practice_analytics.engine.result import Metrics, PreviousMetrics, Snapshot
from practice_analytics.models.enums import Location, Timeframe
from practice_analytics.models.reference import ReferenceData, TimeSeriesPoint
from practice_analytics.reference.fallback import FALLBACK_REFERENCE_DATA

logger = logging.getLogger(__name__)


class SnapshotCalculator:
    """Stateless engine that derives analytics snapshots from reference data."""

    def __init__(self, reference: Optional[ReferenceData] = None):
        self._reference = reference or FALLBACK_REFERENCE_DATA

    @property
    def reference(self) -> ReferenceData:
        return self._reference

    def calculate(self, timeframe: Timeframe | str, location: Location | str) -> Snapshot:
        """Build the full snapshot for a selection.

        Unknown timeframe or location keys raise ValueError before any
        adjustment runs.
        """
        timeframe = Timeframe(timeframe)
        location = Location(location)
        months = timeframe.months
        profile = get_profile(location)

        adjusted = adjust_series(normalize_series(self._reference.time_series), profile)
        current, previous = split_periods(adjusted, months)

        current_totals = _aggregate(current)
        previous_totals = _aggregate(previous)
        revenue_delta = percent_change(
            current_totals.total_revenue, previous_totals.total_revenue
        )

        logger.debug(
            "Computed snapshot for %s/%s: %d current, %d previous months",
            timeframe.value,
            location.value,
            len(current),
            len(previous),
        )

        return Snapshot(
            metrics=Metrics(
                total_revenue=current_totals.total_revenue,
                revenue_delta=revenue_delta,
                margin_rate=current_totals.margin_rate,
                new_patients=current_totals.new_patients,
                avg_basket=current_totals.avg_basket,
                private_share=current_totals.private_share,
            ),
            previous_metrics=previous_totals,
            time_series=current,
            previous_series=previous,
            service_mix=adjust_service_mix(
                self._reference.service_mix_for(timeframe), profile
            ),
            staff_performance=adjust_staff_performance(
                self._reference.staff_performance, profile
            ),
            collection_risks=adjust_collection_risks(
                self._reference.collection_risks, profile
            ),
            # Trend comes from the whole adjusted history, not the selected window.
            forecast=build_forecast(adjusted, months),
        )


def calculate_snapshot(
    timeframe: Timeframe | str,
    location: Location | str,
    reference: Optional[ReferenceData] = None,
) -> Snapshot:
    """Convenience wrapper around SnapshotCalculator.calculate()."""
    return SnapshotCalculator(reference).calculate(timeframe, location)


def normalize_series(series: Iterable[TimeSeriesPoint]) -> list[TimeSeriesPoint]:
    """Sort ascending by month and keep the last point seen for each month."""
    by_month: dict[tuple[int, int], TimeSeriesPoint] = {}
    for point in series:
        by_month[(point.date.year, point.date.month)] = point
    return [by_month[key] for key in sorted(by_month)]


def split_periods(
    series: Sequence[TimeSeriesPoint], months: int
) -> tuple[list[TimeSeriesPoint], list[TimeSeriesPoint]]:
    """Return (current, previous) trailing windows of ``months`` points each.

    The previous window is shorter than ``months``, or empty, when history
    runs out.
    """
    current_start = max(len(series) - months, 0)
    previous_start = max(current_start - months, 0)
    return list(series[current_start:]), list(series[previous_start:current_start])


def percent_change(current: float, previous: float) -> float:
    """Relative change; 0 when the baseline is 0 rather than dividing by zero."""
    if previous == 0:
        return 0.0
    return (current - previous) / previous


def _mean(values: Sequence[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _aggregate(points: Sequence[TimeSeriesPoint]) -> PreviousMetrics:
    """Sum and average one slice. An empty slice aggregates to all zeros."""
    return PreviousMetrics(
        total_revenue=sum(p.revenue for p in points),
        margin_rate=_mean([p.margin for p in points]),
        new_patients=sum(p.new_patients for p in points),
        avg_basket=_mean([p.avg_basket for p in points]),
        private_share=_mean([p.private_share for p in points]),
    )
