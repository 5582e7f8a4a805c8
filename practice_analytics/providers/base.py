from __future__ import annotations

from abc import ABC, abstractmethod

from practice_analytics.models.reference import ReferenceData


class ProviderBase(ABC):
    """Abstract base for all reference data providers."""

    @abstractmethod
    async def fetch(self) -> ReferenceData:
        """Fetch and return a complete, validated reference dataset."""
        ...

    @abstractmethod
    async def health_check(self) -> bool:
        """Verify the provider's backing store is reachable."""
        ...
