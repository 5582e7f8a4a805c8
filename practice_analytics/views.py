"""Read-only presentation views derived from a snapshot and selection."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from practice_analytics.engine.calculator import percent_change
from practice_analytics.engine.result import Snapshot
from practice_analytics.models.enums import Focus, Timeframe, Trend

_TIMEFRAME_LABELS: dict[Timeframe, str] = {
    Timeframe.LAST_30_DAYS: "Last 30 days",
    Timeframe.LAST_90_DAYS: "Last 90 days",
    Timeframe.LAST_12_MONTHS: "Last 12 months",
}

_COMPARISON_LABELS: dict[Timeframe, str] = {
    Timeframe.LAST_30_DAYS: "Compared to previous month",
    Timeframe.LAST_90_DAYS: "Compared to previous quarter",
    Timeframe.LAST_12_MONTHS: "Compared to previous year",
}

_HIDE_COMPARISON_LABEL = "Hide previous period"

_TREND_LABELS: dict[Trend, str] = {
    Trend.UP: "rising",
    Trend.DOWN: "falling",
    Trend.STABLE: "stable",
}


@dataclass(frozen=True)
class MetricChanges:
    """Period-over-period relative change of each headline metric."""

    revenue: float
    margin: float
    patients: float
    private_share: float


def timeframe_label(timeframe: Timeframe | str) -> str:
    return _TIMEFRAME_LABELS[Timeframe(timeframe)]


def comparison_label(timeframe: Timeframe | str, compare_previous: bool) -> str:
    if not compare_previous:
        return _HIDE_COMPARISON_LABEL
    return _COMPARISON_LABELS[Timeframe(timeframe)]


def trend_label(trend: Trend | str) -> str:
    return _TREND_LABELS[Trend(trend)]


def metric_changes(snapshot: Snapshot) -> MetricChanges:
    """Compare current and previous metrics; a zero baseline counts as no change."""
    current, previous = snapshot.metrics, snapshot.previous_metrics
    return MetricChanges(
        revenue=percent_change(current.total_revenue, previous.total_revenue),
        margin=percent_change(current.margin_rate, previous.margin_rate),
        patients=percent_change(current.new_patients, previous.new_patients),
        private_share=percent_change(current.private_share, previous.private_share),
    )


def focus_series(snapshot: Snapshot, focus: Focus | str) -> list[tuple[date, float]]:
    """Return the (month, value) pairs of the focused metric for the current slice."""
    focus = Focus(focus)
    if focus is Focus.REVENUE:
        return [(p.date, p.revenue) for p in snapshot.time_series]
    if focus is Focus.MARGIN:
        return [(p.date, p.margin) for p in snapshot.time_series]
    return [(p.date, p.new_patients) for p in snapshot.time_series]
