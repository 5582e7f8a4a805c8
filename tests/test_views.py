"""Tests for presentation views derived from snapshots."""

from datetime import date

import pytest

from practice_analytics.engine.calculator import SnapshotCalculator
from practice_analytics.models.enums import Focus, Timeframe, Trend
from practice_analytics.views import (
    comparison_label,
    focus_series,
    metric_changes,
    timeframe_label,
    trend_label,
)


class TestLabels:
    def test_timeframe_labels(self):
        assert timeframe_label(Timeframe.LAST_30_DAYS) == "Last 30 days"
        assert timeframe_label("90d") == "Last 90 days"
        assert timeframe_label("12m") == "Last 12 months"

    def test_comparison_label_when_hidden(self):
        assert comparison_label("12m", compare_previous=False) == "Hide previous period"

    def test_comparison_label_per_timeframe(self):
        assert comparison_label("30d", True) == "Compared to previous month"
        assert comparison_label("90d", True) == "Compared to previous quarter"
        assert comparison_label("12m", True) == "Compared to previous year"

    def test_trend_labels(self):
        assert trend_label(Trend.UP) == "rising"
        assert trend_label("down") == "falling"
        assert trend_label("stable") == "stable"


class TestMetricChanges:
    def test_last_month_changes(self, calculator):
        changes = metric_changes(calculator.calculate("30d", "Aggregate"))
        assert changes.revenue == pytest.approx((252_100 - 244_800) / 244_800)
        assert changes.margin == pytest.approx(0.0)
        assert changes.patients == pytest.approx((156 - 151) / 151)
        assert changes.private_share == pytest.approx((0.47 - 0.46) / 0.46)

    def test_zero_baseline(self, two_month_reference):
        snapshot = SnapshotCalculator(two_month_reference).calculate("90d", "Aggregate")
        changes = metric_changes(snapshot)
        assert changes.revenue == 0
        assert changes.margin == 0
        assert changes.patients == 0
        assert changes.private_share == 0


class TestFocusSeries:
    def test_revenue_focus(self, calculator):
        snapshot = calculator.calculate("90d", "Aggregate")
        assert focus_series(snapshot, Focus.REVENUE) == [
            (date(2025, 5, 1), 236_600),
            (date(2025, 6, 1), 244_800),
            (date(2025, 7, 1), 252_100),
        ]

    def test_patients_focus(self, calculator):
        snapshot = calculator.calculate("30d", "Aggregate")
        assert focus_series(snapshot, "patients") == [(date(2025, 7, 1), 156)]

    def test_margin_focus(self, calculator):
        snapshot = calculator.calculate("30d", "Aggregate")
        assert focus_series(snapshot, "margin") == [(date(2025, 7, 1), 0.58)]
