"""Tests for dashboard event streaming: sequencing, replay and shutdown."""

import asyncio

import pytest

from practice_analytics.streaming.events import CONNECTED_COMMENT, DashboardEventType, SSEEvent
from practice_analytics.streaming.manager import StreamManager


def _frame_id(frame: str) -> int:
    return int(frame.split("\n", 1)[0].removeprefix("id: "))


async def _next(gen):
    return await asyncio.wait_for(gen.__anext__(), timeout=1.0)


class TestSSEEvent:
    def test_frame_layout(self):
        event = SSEEvent(
            event_type=DashboardEventType.SNAPSHOT_RECOMPUTED,
            data={"dashboard_id": "d-1"},
            sequence_id=7,
        )
        lines = event.encode().split("\n")
        assert lines[0] == "id: 7"
        assert lines[1] == "event: snapshot_recomputed"
        assert lines[2].startswith("data: {")
        assert '"dashboard_id": "d-1"' in lines[2]
        assert '"emitted_at"' in lines[2]
        assert lines[3:] == ["", ""]


class TestPublish:
    @pytest.mark.asyncio
    async def test_sequence_ids_are_per_dashboard(self):
        manager = StreamManager()
        first = await manager.publish("dash-1", DashboardEventType.DASHBOARD_CREATED, {})
        second = await manager.publish("dash-1", DashboardEventType.SELECTION_CHANGED, {})
        other = await manager.publish("dash-2", DashboardEventType.DASHBOARD_CREATED, {})
        assert (first.sequence_id, second.sequence_id) == (1, 2)
        assert other.sequence_id == 1

    @pytest.mark.asyncio
    async def test_every_listener_receives_the_event(self):
        manager = StreamManager()
        queues = [await manager.subscribe("dash-1") for _ in range(2)]
        await manager.publish("dash-1", DashboardEventType.SELECTION_CHANGED, {"x": 1})
        received = [q.get_nowait() for q in queues]
        assert [e.sequence_id for e in received] == [1, 1]

    @pytest.mark.asyncio
    async def test_unsubscribed_queue_gets_nothing(self):
        manager = StreamManager()
        queue = await manager.subscribe("dash-1")
        await manager.unsubscribe("dash-1", queue)
        await manager.publish("dash-1", DashboardEventType.SELECTION_CHANGED, {})
        assert queue.empty()
        assert manager.listener_count("dash-1") == 0

    @pytest.mark.asyncio
    async def test_history_since(self):
        manager = StreamManager()
        for _ in range(3):
            await manager.publish("dash-1", DashboardEventType.SELECTION_CHANGED, {})
        assert [e.sequence_id for e in manager.history_since("dash-1", 1)] == [2, 3]
        assert manager.history_since("unknown", 0) == []


class TestEventGenerator:
    @pytest.mark.asyncio
    async def test_replays_missed_events_on_reconnect(self):
        manager = StreamManager()
        for _ in range(3):
            await manager.publish("dash-1", DashboardEventType.SELECTION_CHANGED, {})

        gen = manager.event_generator("dash-1", last_event_id=1)
        frames = [await _next(gen) for _ in range(3)]
        await gen.aclose()

        assert frames[0] == CONNECTED_COMMENT
        assert [_frame_id(f) for f in frames[1:]] == [2, 3]

    @pytest.mark.asyncio
    async def test_event_published_during_connect_is_sent_once(self):
        manager = StreamManager()
        await manager.publish("dash-1", DashboardEventType.DASHBOARD_CREATED, {})

        gen = manager.event_generator("dash-1", last_event_id=0)
        assert await _next(gen) == CONNECTED_COMMENT
        # Lands in both the replay history and the live queue.
        await manager.publish("dash-1", DashboardEventType.SELECTION_CHANGED, {})

        first = await _next(gen)
        second = await _next(gen)
        await manager.publish("dash-1", DashboardEventType.SNAPSHOT_RECOMPUTED, {})
        third = await _next(gen)
        await gen.aclose()

        assert [_frame_id(f) for f in (first, second, third)] == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_live_events_without_last_event_id(self):
        manager = StreamManager()
        await manager.publish("dash-1", DashboardEventType.DASHBOARD_CREATED, {})

        gen = manager.event_generator("dash-1")
        assert await _next(gen) == CONNECTED_COMMENT
        await manager.publish("dash-1", DashboardEventType.SELECTION_CHANGED, {})
        frame = await _next(gen)
        await gen.aclose()

        assert _frame_id(frame) == 2

    @pytest.mark.asyncio
    async def test_closing_generator_unsubscribes(self):
        manager = StreamManager()
        gen = manager.event_generator("dash-1")
        await _next(gen)
        assert manager.listener_count("dash-1") == 1
        await gen.aclose()
        assert manager.listener_count("dash-1") == 0


class TestDiscard:
    @pytest.mark.asyncio
    async def test_resets_sequence_and_history(self):
        manager = StreamManager()
        await manager.publish("dash-1", DashboardEventType.DASHBOARD_CREATED, {})
        manager.discard("dash-1")
        assert manager.history_since("dash-1", 0) == []
        event = await manager.publish("dash-1", DashboardEventType.DASHBOARD_CREATED, {})
        assert event.sequence_id == 1

    @pytest.mark.asyncio
    async def test_ends_open_streams(self):
        manager = StreamManager()
        gens = [manager.event_generator("dash-1") for _ in range(2)]
        for gen in gens:
            assert await _next(gen) == CONNECTED_COMMENT

        manager.discard("dash-1")

        assert manager.listener_count("dash-1") == 0
        for gen in gens:
            with pytest.raises(StopAsyncIteration):
                await _next(gen)

    @pytest.mark.asyncio
    async def test_leaves_other_dashboards_streaming(self):
        manager = StreamManager()
        gen = manager.event_generator("dash-2")
        await _next(gen)
        manager.discard("dash-1")
        await manager.publish("dash-2", DashboardEventType.SELECTION_CHANGED, {})
        frame = await _next(gen)
        await gen.aclose()
        assert _frame_id(frame) == 1
