"""Tests for the location adjustment profile table."""

import pytest

from practice_analytics.engine.profiles import (
    IDENTITY_PROFILE,
    LOCATION_PROFILES,
    get_profile,
)
from practice_analytics.models.enums import Location


class TestProfileTable:
    def test_every_location_has_a_profile(self):
        for location in Location:
            assert location in LOCATION_PROFILES

    def test_aggregate_is_identity(self):
        profile = get_profile(Location.AGGREGATE)
        assert profile == IDENTITY_PROFILE
        assert profile.is_identity

    def test_site_profiles_are_not_identity(self):
        for location in (Location.SITE_A, Location.SITE_B, Location.SITE_C):
            assert not get_profile(location).is_identity

    def test_lookup_by_string_key(self):
        assert get_profile("Site B").revenue_factor == 0.28

    def test_site_b_factors(self):
        profile = get_profile(Location.SITE_B)
        assert profile.margin_delta == -0.015
        assert profile.private_delta == -0.01
        assert profile.patients_factor == 0.32
        assert profile.avg_basket_factor == 0.96
        assert profile.collection_factor == 0.27

    def test_unknown_location_raises(self):
        with pytest.raises(ValueError):
            get_profile("Site Z")
