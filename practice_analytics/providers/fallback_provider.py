"""Fallback provider -- serves the bundled reference dataset."""

from __future__ import annotations

from practice_analytics.models.reference import ReferenceData
from practice_analytics.reference.loader import get_default_reference_data

from .base import ProviderBase


class FallbackProvider(ProviderBase):
    """Always-available provider backed by in-process constants."""

    async def fetch(self) -> ReferenceData:
        return get_default_reference_data()

    async def health_check(self) -> bool:
        return True
