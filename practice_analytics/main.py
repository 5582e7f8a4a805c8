"""FastAPI application for the practice analytics engine: REST endpoints and SSE streaming."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from dataclasses import asdict
from typing import Any, Optional
from uuid import uuid4

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

from practice_analytics.config.settings import Settings
from practice_analytics.engine.calculator import SnapshotCalculator
from practice_analytics.hooks.audit_hooks import make_audit_observer
from practice_analytics.models.enums import Focus, Location, Timeframe
from practice_analytics.orchestrator import ReferenceDataOrchestrator
from practice_analytics.state.container import DashboardState, Selection, SnapshotContainer
from practice_analytics.streaming import StreamManager
from practice_analytics.streaming.events import DashboardEventType
from practice_analytics.views import comparison_label, metric_changes, timeframe_label

settings = Settings()

logging.basicConfig(level=settings.log_level)
logger = logging.getLogger(__name__)

# Bundled data until startup swaps in the remote dataset
_calculator = SnapshotCalculator()


@asynccontextmanager
async def lifespan(app: FastAPI):
    global _calculator
    reference = await ReferenceDataOrchestrator(settings=settings).load()
    _calculator = SnapshotCalculator(reference)
    yield


app = FastAPI(title="Practice Analytics API", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Singleton stream manager
stream_manager = StreamManager()

# In-memory dashboard containers, one per console session
_dashboards: dict[str, dict[str, Any]] = {}


class SnapshotRequest(BaseModel):
    timeframe: Timeframe
    location: Location


class CreateDashboardRequest(BaseModel):
    timeframe: Optional[Timeframe] = None
    location: Optional[Location] = None


class CreateDashboardResponse(BaseModel):
    dashboard_id: str
    selection: dict[str, Any]


class TimeframeUpdate(BaseModel):
    timeframe: Timeframe


class LocationUpdate(BaseModel):
    location: Location


class FocusUpdate(BaseModel):
    focus: Focus


def _selection_payload(selection: Selection) -> dict[str, Any]:
    return jsonable_encoder(asdict(selection))


def _dashboard_view(dashboard_id: str, state: DashboardState) -> dict[str, Any]:
    selection = state.selection
    return {
        "dashboard_id": dashboard_id,
        "selection": _selection_payload(selection),
        "snapshot": jsonable_encoder(state.snapshot.to_dict()),
        "changes": asdict(metric_changes(state.snapshot)),
        "labels": {
            "timeframe": timeframe_label(selection.timeframe),
            "comparison": comparison_label(selection.timeframe, selection.compare_previous),
        },
    }


def _get_container(dashboard_id: str) -> SnapshotContainer:
    dashboard = _dashboards.get(dashboard_id)
    if dashboard is None:
        raise HTTPException(status_code=404, detail="Dashboard not found")
    return dashboard["container"]


async def _publish_change(
    dashboard_id: str, previous: DashboardState, current: DashboardState
) -> None:
    await stream_manager.publish(
        dashboard_id,
        DashboardEventType.SELECTION_CHANGED,
        {"dashboard_id": dashboard_id, "selection": _selection_payload(current.selection)},
    )
    if current.snapshot is not previous.snapshot:
        await stream_manager.publish(
            dashboard_id,
            DashboardEventType.SNAPSHOT_RECOMPUTED,
            {
                "dashboard_id": dashboard_id,
                "metrics": jsonable_encoder(asdict(current.snapshot.metrics)),
            },
        )


async def _apply(dashboard_id: str, action) -> dict[str, Any]:
    """Run a container action, stream the resulting events and return the new view."""
    container = _get_container(dashboard_id)
    previous = container.state
    action(container)
    await _publish_change(dashboard_id, previous, container.state)
    return _dashboard_view(dashboard_id, container.state)


@app.post("/api/analytics/snapshot")
async def compute_snapshot(body: SnapshotRequest):
    """Compute a one-off snapshot for a (timeframe, location) selection."""
    snapshot = _calculator.calculate(body.timeframe, body.location)
    return jsonable_encoder(snapshot.to_dict())


@app.post("/api/dashboards", response_model=CreateDashboardResponse)
async def create_dashboard(body: CreateDashboardRequest):
    """Create a dashboard container with its initial selection and snapshot."""
    dashboard_id = str(uuid4())
    selection = Selection(
        timeframe=body.timeframe or settings.default_timeframe,
        location=body.location or settings.default_location,
    )
    container = SnapshotContainer(calculator=_calculator, selection=selection)
    audit: list[dict[str, Any]] = []
    container.subscribe(make_audit_observer(dashboard_id, audit))
    _dashboards[dashboard_id] = {"container": container, "audit": audit}

    await stream_manager.publish(
        dashboard_id,
        DashboardEventType.DASHBOARD_CREATED,
        {"dashboard_id": dashboard_id, "selection": _selection_payload(selection)},
    )
    return CreateDashboardResponse(
        dashboard_id=dashboard_id, selection=_selection_payload(selection)
    )


@app.get("/api/dashboards/{dashboard_id}")
async def get_dashboard(dashboard_id: str):
    """Return the current selection, snapshot and derived views."""
    container = _get_container(dashboard_id)
    return _dashboard_view(dashboard_id, container.state)


@app.delete("/api/dashboards/{dashboard_id}")
async def delete_dashboard(dashboard_id: str):
    _get_container(dashboard_id)
    del _dashboards[dashboard_id]
    stream_manager.discard(dashboard_id)
    return {"dashboard_id": dashboard_id, "status": "deleted"}


@app.put("/api/dashboards/{dashboard_id}/timeframe")
async def update_timeframe(dashboard_id: str, body: TimeframeUpdate):
    return await _apply(dashboard_id, lambda c: c.set_timeframe(body.timeframe))


@app.put("/api/dashboards/{dashboard_id}/location")
async def update_location(dashboard_id: str, body: LocationUpdate):
    return await _apply(dashboard_id, lambda c: c.set_location(body.location))


@app.put("/api/dashboards/{dashboard_id}/focus")
async def update_focus(dashboard_id: str, body: FocusUpdate):
    return await _apply(dashboard_id, lambda c: c.set_focus(body.focus))


@app.post("/api/dashboards/{dashboard_id}/compare")
async def toggle_compare(dashboard_id: str):
    return await _apply(dashboard_id, lambda c: c.toggle_compare())


@app.get("/api/dashboards/{dashboard_id}/audit")
async def get_audit_log(dashboard_id: str):
    _get_container(dashboard_id)
    return {"dashboard_id": dashboard_id, "entries": _dashboards[dashboard_id]["audit"]}


@app.get("/api/dashboards/{dashboard_id}/stream")
async def stream_dashboard(dashboard_id: str, request: Request):
    """SSE endpoint that streams selection and snapshot change events."""
    _get_container(dashboard_id)
    last_event_id: int | None = None
    raw = request.headers.get("Last-Event-ID") or request.headers.get("last-event-id")
    if raw is not None:
        try:
            last_event_id = int(raw)
        except ValueError:
            pass

    generator = stream_manager.event_generator(dashboard_id, last_event_id=last_event_id)
    return StreamingResponse(generator, media_type="text/event-stream")


@app.get("/health")
async def health():
    """Health check endpoint."""
    return {"status": "ok"}
