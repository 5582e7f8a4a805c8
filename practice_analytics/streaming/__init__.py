"""SSE streaming of dashboard selection and snapshot changes."""

from .events import CONNECTED_COMMENT, DashboardEventType, SSEEvent
from .manager import StreamManager

__all__ = ["CONNECTED_COMMENT", "DashboardEventType", "SSEEvent", "StreamManager"]
