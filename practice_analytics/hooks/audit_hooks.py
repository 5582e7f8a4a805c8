"""Audit hooks: logs dashboard selection changes for the audit trail."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from practice_analytics.state.container import DashboardEvent, DashboardState, Observer

logger = logging.getLogger(__name__)


def audit_entry(
    dashboard_id: str,
    previous: DashboardState,
    current: DashboardState,
    event: DashboardEvent,
) -> dict[str, Any]:
    """Build the audit record for one dispatched dashboard event."""
    return {
        "dashboard_id": dashboard_id,
        "event": type(event).__name__,
        "timeframe": current.selection.timeframe.value,
        "location": current.selection.location.value,
        "recomputed": current.snapshot is not previous.snapshot,
        "timestamp": datetime.now(tz=timezone.utc).isoformat(),
    }


def make_audit_observer(
    dashboard_id: str, sink: Optional[list[dict[str, Any]]] = None
) -> Observer:
    """Return a container observer that logs every change and appends it to ``sink``."""

    def observe(
        previous: DashboardState, current: DashboardState, event: DashboardEvent
    ) -> None:
        entry = audit_entry(dashboard_id, previous, current, event)
        logger.info(
            "Dashboard audit: %s → %s (%s/%s)",
            entry["event"],
            dashboard_id,
            entry["timeframe"],
            entry["location"],
        )
        if sink is not None:
            sink.append(entry)

    return observe
