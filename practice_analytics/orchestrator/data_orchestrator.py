"""Data orchestrator -- picks a reference data provider and falls back."""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from practice_analytics.config.settings import Settings
from practice_analytics.models.reference import ReferenceData
from practice_analytics.providers.fallback_provider import FallbackProvider
from practice_analytics.providers.supabase_provider import SupabaseProvider

logger = logging.getLogger(__name__)


class ReferenceDataOrchestrator:
    """Coordinates reference data loading.

    Routes:
    - Supabase configured -> remote tables, bundled dataset on any failure.
    - Not configured -> bundled dataset.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self._settings = settings or Settings()
        self._fallback = FallbackProvider()

    async def load(self) -> ReferenceData:
        if not self._settings.supabase_configured:
            logger.info("Supabase not configured, using bundled reference data")
            return await self._fallback.fetch()

        remote = SupabaseProvider(settings=self._settings)
        try:
            return await remote.fetch()
        except (httpx.HTTPError, ValidationError, ValueError, TimeoutError) as e:
            logger.warning(f"Remote reference data unavailable, using bundled data: {e}")
            return await self._fallback.fetch()
        finally:
            await remote.aclose()
