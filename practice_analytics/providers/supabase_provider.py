"""Supabase provider -- fetches reference tables from the practice's
remote data service over its REST interface."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from practice_analytics.config.settings import Settings
from practice_analytics.models.reference import ReferenceData
from practice_analytics.reference.schema import ReferencePayload

from .base import ProviderBase

logger = logging.getLogger(__name__)


# Table name per reference payload section, with the row ordering to request.
TABLE_QUERIES: dict[str, dict[str, str]] = {
    "time_series": {"table": "analytics_time_series", "order": "date.asc"},
    "service_mix": {"table": "analytics_service_mix", "order": "position.asc"},
    "staff_performance": {"table": "analytics_staff_performance", "order": "position.asc"},
    "collection_risks": {"table": "analytics_collection_risks", "order": "position.asc"},
}


class SupabaseNotConfiguredError(RuntimeError):
    def __init__(self) -> None:
        super().__init__(
            "Supabase is not configured. Set SUPABASE_URL and SUPABASE_KEY."
        )


class SupabaseProvider(ProviderBase):
    """Fetches the analytics reference tables via the Supabase REST API."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._settings = settings or Settings()
        # Injected clients belong to the caller and are left open by aclose().
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self._settings.reference_timeout_seconds
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    @property
    def base_url(self) -> str:
        return f"{self._settings.supabase_url.rstrip('/')}/rest/v1"

    def _headers(self) -> dict[str, str]:
        key = self._settings.supabase_key
        return {
            "apikey": key,
            "Authorization": f"Bearer {key}",
            "Accept": "application/json",
        }

    async def health_check(self) -> bool:
        if not self._settings.supabase_configured:
            return False
        try:
            resp = await self._client.get(
                f"{self.base_url}/{TABLE_QUERIES['time_series']['table']}",
                params={"select": "date", "limit": "1"},
                headers=self._headers(),
            )
            return resp.status_code == 200
        except httpx.HTTPError as e:
            logger.error(f"Supabase health check failed: {e}")
            return False

    async def fetch(self) -> ReferenceData:
        if not self._settings.supabase_configured:
            raise SupabaseNotConfiguredError()

        sections: dict[str, list[dict[str, Any]]] = {}
        for section, query in TABLE_QUERIES.items():
            sections[section] = await self._select(query["table"], query["order"])

        payload = {
            "time_series": sections["time_series"],
            "service_mix": _group_by_timeframe(sections["service_mix"]),
            "staff_performance": sections["staff_performance"],
            "collection_risks": sections["collection_risks"],
        }
        return ReferencePayload.model_validate(payload).to_reference_data()

    async def _select(self, table: str, order: str) -> list[dict[str, Any]]:
        resp = await self._client.get(
            f"{self.base_url}/{table}",
            params={"select": "*", "order": order},
            headers=self._headers(),
        )
        resp.raise_for_status()
        rows = resp.json()
        if not isinstance(rows, list):
            raise ValueError(f"Expected a list of rows from '{table}', got {type(rows).__name__}")
        logger.info("Fetched %d rows from %s", len(rows), table)
        return rows


def _group_by_timeframe(rows: list[dict[str, Any]]) -> dict[str, list[dict[str, Any]]]:
    """Bucket flat service-mix rows by their ``timeframe`` column, keeping row order."""
    buckets: dict[str, list[dict[str, Any]]] = {}
    for row in rows:
        entry = {k: v for k, v in row.items() if k != "timeframe"}
        buckets.setdefault(row.get("timeframe"), []).append(entry)
    return buckets
