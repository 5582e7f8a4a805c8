"""Shared test fixtures for the practice analytics test suite."""

from dataclasses import replace
from datetime import date

import pytest

from practice_analytics.engine.calculator import SnapshotCalculator
from practice_analytics.models.reference import ReferenceData, TimeSeriesPoint
from practice_analytics.reference.fallback import FALLBACK_REFERENCE_DATA


def make_point(year, month, revenue, margin=0.5, private_share=0.4, new_patients=100, avg_basket=200):
    """Helper to create a TimeSeriesPoint with minimal boilerplate."""
    return TimeSeriesPoint(
        date=date(year, month, 1),
        revenue=revenue,
        margin=margin,
        private_share=private_share,
        new_patients=new_patients,
        avg_basket=avg_basket,
    )


@pytest.fixture
def reference() -> ReferenceData:
    """The bundled 19-month reference dataset (Jan 2024 - Jul 2025)."""
    return FALLBACK_REFERENCE_DATA


@pytest.fixture
def calculator(reference) -> SnapshotCalculator:
    return SnapshotCalculator(reference)


@pytest.fixture
def two_month_reference() -> ReferenceData:
    """Only two months of history, too short for a forecast or a 90d comparison."""
    return replace(
        FALLBACK_REFERENCE_DATA,
        time_series=(
            make_point(2025, 6, 100_000),
            make_point(2025, 7, 120_000),
        ),
    )


@pytest.fixture
def single_month_reference() -> ReferenceData:
    return replace(
        FALLBACK_REFERENCE_DATA,
        time_series=(make_point(2025, 7, 90_000),),
    )
