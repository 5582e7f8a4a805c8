"""Unit tests for the linear forecast generator."""

from datetime import date

import pytest

from practice_analytics.engine.forecast import build_forecast

from conftest import make_point


@pytest.fixture
def four_months():
    return [
        make_point(2025, 4, 224_900, margin=0.55),
        make_point(2025, 5, 236_600, margin=0.57),
        make_point(2025, 6, 244_800, margin=0.58),
        make_point(2025, 7, 252_100, margin=0.58),
    ]


class TestBuildForecast:
    def test_horizon_matches_months(self, four_months):
        for months in (1, 3, 12):
            assert len(build_forecast(four_months, months)) == months

    def test_empty_below_four_points(self, four_months):
        assert build_forecast(four_months[1:], 12) == []
        assert build_forecast([], 3) == []

    def test_linear_revenue_growth(self, four_months):
        forecast = build_forecast(four_months, 3)
        growth = (252_100 - 224_900) / 3
        for i, point in enumerate(forecast):
            assert point.projected_revenue == pytest.approx(252_100 + growth * (i + 1))

    def test_revenue_not_rounded(self, four_months):
        forecast = build_forecast(four_months, 1)
        assert forecast[0].projected_revenue != round(forecast[0].projected_revenue)

    def test_margin_starts_at_average_and_drifts(self, four_months):
        forecast = build_forecast(four_months, 3)
        assert forecast[0].projected_margin == pytest.approx(0.57)
        assert forecast[1].projected_margin == pytest.approx(0.575)
        assert forecast[2].projected_margin == pytest.approx(0.58)

    def test_margin_capped(self):
        high = [make_point(2025, m, 1000, margin=0.68) for m in range(1, 5)]
        forecast = build_forecast(high, 12)
        assert all(p.projected_margin == 0.65 for p in forecast)

    def test_margin_floored(self):
        low = [make_point(2025, m, 1000, margin=0.2) for m in range(1, 5)]
        assert build_forecast(low, 2)[0].projected_margin == 0.40

    def test_dates_advance_monthly_across_year_end(self, four_months):
        forecast = build_forecast(four_months, 12)
        assert forecast[0].date == date(2025, 8, 1)
        assert forecast[5].date == date(2026, 1, 1)
        assert forecast[11].date == date(2026, 7, 1)

    def test_only_last_four_points_used(self, four_months):
        history = [make_point(2024, 1, 1), make_point(2024, 2, 999_999)] + four_months
        assert build_forecast(history, 3) == build_forecast(four_months, 3)
