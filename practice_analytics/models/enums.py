from enum import Enum


class Timeframe(str, Enum):
    LAST_30_DAYS = "30d"
    LAST_90_DAYS = "90d"
    LAST_12_MONTHS = "12m"

    @property
    def months(self) -> int:
        """Length of the trailing window in calendar months."""
        return _TIMEFRAME_MONTHS[self]


_TIMEFRAME_MONTHS = {
    Timeframe.LAST_30_DAYS: 1,
    Timeframe.LAST_90_DAYS: 3,
    Timeframe.LAST_12_MONTHS: 12,
}


class Location(str, Enum):
    AGGREGATE = "Aggregate"
    SITE_A = "Site A"
    SITE_B = "Site B"
    SITE_C = "Site C"


class Focus(str, Enum):
    REVENUE = "revenue"
    MARGIN = "margin"
    PATIENTS = "patients"


class Trend(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"
