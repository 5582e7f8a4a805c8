"""Dashboard update events and their text/event-stream framing."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any

# Sent first on every stream; browsers ignore comment lines.
CONNECTED_COMMENT = ": connected\n\n"


class DashboardEventType(str, Enum):
    DASHBOARD_CREATED = "dashboard_created"
    SELECTION_CHANGED = "selection_changed"
    SNAPSHOT_RECOMPUTED = "snapshot_recomputed"


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


@dataclass(frozen=True)
class SSEEvent:
    """One sequenced dashboard update.

    ``sequence_id`` is per dashboard and doubles as the SSE ``id`` field, so a
    reconnecting client can hand it back as ``Last-Event-ID``.
    """

    event_type: DashboardEventType
    data: dict[str, Any]
    sequence_id: int
    emitted_at: datetime = field(default_factory=_utcnow)

    def encode(self) -> str:
        """Frame the event as an SSE message (id, event, data, blank line)."""
        body = json.dumps({**self.data, "emitted_at": self.emitted_at.isoformat()}, default=str)
        fields = (
            ("id", self.sequence_id),
            ("event", self.event_type.value),
            ("data", body),
        )
        return "".join(f"{name}: {value}\n" for name, value in fields) + "\n"
