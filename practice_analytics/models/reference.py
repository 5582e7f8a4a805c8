from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Mapping

from .enums import Timeframe, Trend


@dataclass(frozen=True)
class TimeSeriesPoint:
    """One calendar month of practice-wide financial figures."""

    date: date  # first day of the month
    revenue: float
    margin: float
    private_share: float
    new_patients: int
    avg_basket: float


@dataclass(frozen=True)
class ServiceMixEntry:
    """A named revenue segment within one timeframe bucket."""

    id: str
    name: str
    category: str
    revenue: float
    delta: float
    margin: float


@dataclass(frozen=True)
class StaffPerformanceEntry:
    employee_id: str
    name: str
    role: str
    revenue: float
    conversion_rate: float
    satisfaction: float


@dataclass(frozen=True)
class CollectionRiskEntry:
    payer: str
    open_amount: float
    overdue_days: int
    trend: Trend


@dataclass(frozen=True)
class ReferenceData:
    """The four reference tables the snapshot engine derives everything from.

    Whether the tables come from the remote data service or the bundled
    fallback constants, the engine only sees this shape.
    """

    time_series: tuple[TimeSeriesPoint, ...]
    service_mix: Mapping[Timeframe, tuple[ServiceMixEntry, ...]]
    staff_performance: tuple[StaffPerformanceEntry, ...]
    collection_risks: tuple[CollectionRiskEntry, ...]

    def service_mix_for(self, timeframe: Timeframe) -> tuple[ServiceMixEntry, ...]:
        """Return the pre-bucketed service mix for a timeframe."""
        return self.service_mix[timeframe]
