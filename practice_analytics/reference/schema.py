"""Pydantic models for validating reference data payloads.

Payloads arrive either as rows from the remote data service or as a JSON
document on disk. Both are validated here before being converted into the
frozen dataclasses the engine consumes.
"""

from __future__ import annotations

import datetime as dt
from types import MappingProxyType

from pydantic import BaseModel, Field, field_validator

from practice_analytics.models.enums import Timeframe, Trend
from practice_analytics.models.reference import (
    CollectionRiskEntry,
    ReferenceData,
    ServiceMixEntry,
    StaffPerformanceEntry,
    TimeSeriesPoint,
)

SERVICE_MIX_BUCKET_SIZE = 4


class TimeSeriesPointSchema(BaseModel):
    date: dt.date
    revenue: float = Field(ge=0)
    margin: float = Field(ge=0, le=1.0)
    private_share: float = Field(ge=0, le=1.0)
    new_patients: int = Field(ge=0)
    avg_basket: float = Field(ge=0)

    def to_point(self) -> TimeSeriesPoint:
        return TimeSeriesPoint(
            date=self.date,
            revenue=self.revenue,
            margin=self.margin,
            private_share=self.private_share,
            new_patients=self.new_patients,
            avg_basket=self.avg_basket,
        )


class ServiceMixEntrySchema(BaseModel):
    id: str
    name: str
    category: str
    revenue: float = Field(ge=0)
    delta: float
    margin: float = Field(ge=0, le=1.0)

    def to_entry(self) -> ServiceMixEntry:
        return ServiceMixEntry(
            id=self.id,
            name=self.name,
            category=self.category,
            revenue=self.revenue,
            delta=self.delta,
            margin=self.margin,
        )


class StaffPerformanceEntrySchema(BaseModel):
    employee_id: str
    name: str
    role: str
    revenue: float = Field(ge=0)
    conversion_rate: float = Field(ge=0, le=1.0)
    satisfaction: float = Field(ge=1.0, le=5.0)

    def to_entry(self) -> StaffPerformanceEntry:
        return StaffPerformanceEntry(
            employee_id=self.employee_id,
            name=self.name,
            role=self.role,
            revenue=self.revenue,
            conversion_rate=self.conversion_rate,
            satisfaction=self.satisfaction,
        )


class CollectionRiskEntrySchema(BaseModel):
    payer: str
    open_amount: float = Field(ge=0)
    overdue_days: int = Field(ge=0)
    trend: Trend

    def to_entry(self) -> CollectionRiskEntry:
        return CollectionRiskEntry(
            payer=self.payer,
            open_amount=self.open_amount,
            overdue_days=self.overdue_days,
            trend=self.trend,
        )


class ReferencePayload(BaseModel):
    """Top-level reference data document."""

    time_series: list[TimeSeriesPointSchema] = Field(min_length=1)
    service_mix: dict[Timeframe, list[ServiceMixEntrySchema]]
    staff_performance: list[StaffPerformanceEntrySchema]
    collection_risks: list[CollectionRiskEntrySchema]

    @field_validator("time_series")
    @classmethod
    def series_sorted_and_unique(
        cls, v: list[TimeSeriesPointSchema]
    ) -> list[TimeSeriesPointSchema]:
        # Later rows win when two rows share a month.
        by_month: dict[tuple[int, int], TimeSeriesPointSchema] = {}
        for point in v:
            by_month[(point.date.year, point.date.month)] = point
        return [by_month[key] for key in sorted(by_month)]

    @field_validator("service_mix")
    @classmethod
    def every_timeframe_bucketed(
        cls, v: dict[Timeframe, list[ServiceMixEntrySchema]]
    ) -> dict[Timeframe, list[ServiceMixEntrySchema]]:
        missing = [tf.value for tf in Timeframe if tf not in v]
        if missing:
            raise ValueError(f"service_mix is missing buckets: {missing}")
        for timeframe, entries in v.items():
            if len(entries) != SERVICE_MIX_BUCKET_SIZE:
                raise ValueError(
                    f"service_mix[{timeframe.value}] must have "
                    f"{SERVICE_MIX_BUCKET_SIZE} entries, got {len(entries)}"
                )
        return v

    def to_reference_data(self) -> ReferenceData:
        return ReferenceData(
            time_series=tuple(p.to_point() for p in self.time_series),
            service_mix=MappingProxyType({
                timeframe: tuple(e.to_entry() for e in self.service_mix[timeframe])
                for timeframe in Timeframe
            }),
            staff_performance=tuple(e.to_entry() for e in self.staff_performance),
            collection_risks=tuple(e.to_entry() for e in self.collection_risks),
        )
