"""Bundled reference dataset used when the remote data service is unavailable.

Figures are monthly practice-wide totals for the aggregate of all sites.
Site-level views are derived from these through the location adjustment
profiles, never stored separately.
"""

from __future__ import annotations

from datetime import date
from types import MappingProxyType

from practice_analytics.models.enums import Timeframe, Trend
from practice_analytics.models.reference import (
    CollectionRiskEntry,
    ReferenceData,
    ServiceMixEntry,
    StaffPerformanceEntry,
    TimeSeriesPoint,
)

MONTHLY_TIME_SERIES: tuple[TimeSeriesPoint, ...] = (
    TimeSeriesPoint(date(2024, 1, 1), 152000, 0.44, 0.32, 86, 185),
    TimeSeriesPoint(date(2024, 2, 1), 158500, 0.45, 0.34, 92, 189),
    TimeSeriesPoint(date(2024, 3, 1), 166200, 0.46, 0.33, 96, 191),
    TimeSeriesPoint(date(2024, 4, 1), 161400, 0.44, 0.31, 88, 187),
    TimeSeriesPoint(date(2024, 5, 1), 170950, 0.47, 0.35, 99, 193),
    TimeSeriesPoint(date(2024, 6, 1), 178300, 0.48, 0.36, 104, 198),
    TimeSeriesPoint(date(2024, 7, 1), 184600, 0.49, 0.37, 108, 201),
    TimeSeriesPoint(date(2024, 8, 1), 176800, 0.46, 0.35, 101, 195),
    TimeSeriesPoint(date(2024, 9, 1), 188450, 0.50, 0.38, 112, 204),
    TimeSeriesPoint(date(2024, 10, 1), 194200, 0.51, 0.39, 118, 207),
    TimeSeriesPoint(date(2024, 11, 1), 202300, 0.52, 0.40, 121, 212),
    TimeSeriesPoint(date(2024, 12, 1), 208900, 0.53, 0.41, 129, 218),
    TimeSeriesPoint(date(2025, 1, 1), 214300, 0.54, 0.42, 132, 220),
    TimeSeriesPoint(date(2025, 2, 1), 221700, 0.55, 0.43, 135, 223),
    TimeSeriesPoint(date(2025, 3, 1), 229400, 0.56, 0.44, 141, 227),
    TimeSeriesPoint(date(2025, 4, 1), 224900, 0.55, 0.43, 138, 225),
    TimeSeriesPoint(date(2025, 5, 1), 236600, 0.57, 0.45, 146, 231),
    TimeSeriesPoint(date(2025, 6, 1), 244800, 0.58, 0.46, 151, 235),
    TimeSeriesPoint(date(2025, 7, 1), 252100, 0.58, 0.47, 156, 239),
)

SERVICE_MIX: MappingProxyType = MappingProxyType({
    Timeframe.LAST_30_DAYS: (
        ServiceMixEntry("prp-knee", "PRP knee", "Self-pay", 48200, 0.12, 0.58),
        ServiceMixEntry("hyaluron-knee", "Hyaluronic acid knee", "Self-pay", 34100, 0.08, 0.53),
        ServiceMixEntry("shockwave", "Shockwave therapy", "Self-pay", 19800, 0.04, 0.61),
        ServiceMixEntry("private-checkup", "Private check-up", "Diagnostics", 16700, -0.03, 0.45),
    ),
    Timeframe.LAST_90_DAYS: (
        ServiceMixEntry("prp-knee", "PRP knee", "Self-pay", 126500, 0.09, 0.57),
        ServiceMixEntry("hyaluron-knee", "Hyaluronic acid knee", "Self-pay", 97800, 0.07, 0.52),
        ServiceMixEntry("rehab", "Rehab packages", "Therapy", 74500, 0.05, 0.43),
        ServiceMixEntry("preop-coaching", "Pre-op coaching", "Therapy", 52100, 0.02, 0.49),
    ),
    Timeframe.LAST_12_MONTHS: (
        ServiceMixEntry("prp-knee", "PRP knee", "Self-pay", 438200, 0.14, 0.56),
        ServiceMixEntry("hyaluron-knee", "Hyaluronic acid knee", "Self-pay", 372400, 0.11, 0.51),
        ServiceMixEntry("private-checkup", "Private check-up", "Diagnostics", 204600, 0.03, 0.46),
        ServiceMixEntry("rehab", "Rehab packages", "Therapy", 187900, 0.05, 0.44),
    ),
})

STAFF_PERFORMANCE: tuple[StaffPerformanceEntry, ...] = (
    StaffPerformanceEntry("emp-krause", "Dr. Amelie Krause", "Orthopaedic surgeon", 112400, 0.71, 4.9),
    StaffPerformanceEntry("emp-vogt", "Dr. Marten Vogt", "Trauma surgeon", 98600, 0.66, 4.6),
    StaffPerformanceEntry("emp-boettcher", "Lena Boettcher", "Physiotherapy", 64400, 0.62, 4.8),
    StaffPerformanceEntry("emp-linde", "Marcus Linde", "Practice manager", 42100, 0.58, 4.5),
)

COLLECTION_RISKS: tuple[CollectionRiskEntry, ...] = (
    CollectionRiskEntry("Private insurer A", 18200, 28, Trend.DOWN),
    CollectionRiskEntry("Occupational accident clinic", 12400, 16, Trend.STABLE),
    CollectionRiskEntry("Private patients", 8600, 9, Trend.UP),
    CollectionRiskEntry("Health fund Plus", 5400, 35, Trend.DOWN),
)

FALLBACK_REFERENCE_DATA = ReferenceData(
    time_series=MONTHLY_TIME_SERIES,
    service_mix=SERVICE_MIX,
    staff_performance=STAFF_PERFORMANCE,
    collection_risks=COLLECTION_RISKS,
)
