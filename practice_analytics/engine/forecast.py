"""Short-horizon linear revenue forecast."""

from __future__ import annotations

from typing import Sequence

from dateutil.relativedelta import relativedelta

from practice_analytics.engine.adjusters import clamp
from practice_analytics.engine.result import ForecastPoint
from practice_analytics.models.reference import TimeSeriesPoint

TREND_WINDOW = 4
MARGIN_STEP = 0.005
FORECAST_MARGIN_BOUNDS = (0.40, 0.65)


def build_forecast(series: Sequence[TimeSeriesPoint], months: int) -> list[ForecastPoint]:
    """Extrapolate the last four months linearly for ``months`` future months.

    Revenue grows by the average month-over-month change across the trend
    window; margin starts at the window average and drifts up by half a
    point per month. Returns an empty list when fewer than four months of
    history are available.
    """
    if len(series) < TREND_WINDOW:
        return []

    window = series[-TREND_WINDOW:]
    first, last = window[0], window[-1]
    growth_per_month = (last.revenue - first.revenue) / (TREND_WINDOW - 1)
    margin_average = sum(p.margin for p in window) / TREND_WINDOW

    forecast: list[ForecastPoint] = []
    for i in range(months):
        forecast.append(
            ForecastPoint(
                date=last.date + relativedelta(months=i + 1),
                projected_revenue=last.revenue + growth_per_month * (i + 1),
                projected_margin=clamp(
                    margin_average + i * MARGIN_STEP, *FORECAST_MARGIN_BOUNDS
                ),
            )
        )
    return forecast
