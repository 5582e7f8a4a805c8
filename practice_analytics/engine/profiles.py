"""Per-location adjustment profiles.

A site-level view is derived from the aggregate reference data by applying
six fixed scaling factors. The aggregate location maps to the identity
profile, so "no adjustment" is just another table entry.
"""

from __future__ import annotations

from dataclasses import dataclass

from practice_analytics.models.enums import Location


@dataclass(frozen=True)
class LocationAdjustmentProfile:
    revenue_factor: float = 1.0
    margin_delta: float = 0.0
    private_delta: float = 0.0
    patients_factor: float = 1.0
    avg_basket_factor: float = 1.0
    collection_factor: float = 1.0

    @property
    def is_identity(self) -> bool:
        return self == IDENTITY_PROFILE


IDENTITY_PROFILE = LocationAdjustmentProfile()

LOCATION_PROFILES: dict[Location, LocationAdjustmentProfile] = {
    Location.AGGREGATE: IDENTITY_PROFILE,
    Location.SITE_A: LocationAdjustmentProfile(
        revenue_factor=0.52,
        margin_delta=0.01,
        private_delta=0.02,
        patients_factor=0.48,
        avg_basket_factor=1.05,
        collection_factor=0.55,
    ),
    Location.SITE_B: LocationAdjustmentProfile(
        revenue_factor=0.28,
        margin_delta=-0.015,
        private_delta=-0.01,
        patients_factor=0.32,
        avg_basket_factor=0.96,
        collection_factor=0.27,
    ),
    Location.SITE_C: LocationAdjustmentProfile(
        revenue_factor=0.2,
        margin_delta=0.005,
        private_delta=0.015,
        patients_factor=0.22,
        avg_basket_factor=1.02,
        collection_factor=0.18,
    ),
}


def _verify_profile_table() -> None:
    missing = [loc.value for loc in Location if loc not in LOCATION_PROFILES]
    if missing:
        raise RuntimeError(f"No adjustment profile for locations: {missing}")
    if not LOCATION_PROFILES[Location.AGGREGATE].is_identity:
        raise RuntimeError("The aggregate location must map to the identity profile")


_verify_profile_table()


def get_profile(location: Location | str) -> LocationAdjustmentProfile:
    """Look up the adjustment profile for a location.

    Raises ValueError for keys outside the location enumeration.
    """
    return LOCATION_PROFILES[Location(location)]
