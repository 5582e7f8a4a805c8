"""Snapshot container: selection state, pure reducers and observers.

The container holds a single immutable DashboardState. Every change goes
through ``reduce()``, which returns a new state; the container swaps it in
and then notifies observers. Only timeframe and location changes recompute
the snapshot; compare and focus are presentation hints.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Callable, Optional, Union

from practice_analytics.engine.calculator import SnapshotCalculator
from practice_analytics.engine.result import Snapshot
from practice_analytics.models.enums import Focus, Location, Timeframe

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Selection:
    timeframe: Timeframe = Timeframe.LAST_90_DAYS
    location: Location = Location.AGGREGATE
    compare_previous: bool = True
    focus: Focus = Focus.REVENUE


@dataclass(frozen=True)
class DashboardState:
    selection: Selection
    snapshot: Snapshot


@dataclass(frozen=True)
class SetTimeframe:
    timeframe: Timeframe


@dataclass(frozen=True)
class SetLocation:
    location: Location


@dataclass(frozen=True)
class ToggleCompare:
    pass


@dataclass(frozen=True)
class SetFocus:
    focus: Focus


DashboardEvent = Union[SetTimeframe, SetLocation, ToggleCompare, SetFocus]
Observer = Callable[[DashboardState, DashboardState, DashboardEvent], None]


def initial_state(
    calculator: SnapshotCalculator, selection: Optional[Selection] = None
) -> DashboardState:
    selection = selection or Selection()
    return DashboardState(
        selection=selection,
        snapshot=calculator.calculate(selection.timeframe, selection.location),
    )


def reduce(
    state: DashboardState, event: DashboardEvent, calculator: SnapshotCalculator
) -> DashboardState:
    """Return the state that results from applying ``event``."""
    selection = state.selection
    if isinstance(event, SetTimeframe):
        selection = replace(selection, timeframe=Timeframe(event.timeframe))
        return DashboardState(
            selection=selection,
            snapshot=calculator.calculate(selection.timeframe, selection.location),
        )
    if isinstance(event, SetLocation):
        selection = replace(selection, location=Location(event.location))
        return DashboardState(
            selection=selection,
            snapshot=calculator.calculate(selection.timeframe, selection.location),
        )
    if isinstance(event, ToggleCompare):
        return replace(
            state,
            selection=replace(selection, compare_previous=not selection.compare_previous),
        )
    if isinstance(event, SetFocus):
        return replace(state, selection=replace(selection, focus=Focus(event.focus)))
    raise TypeError(f"Unsupported dashboard event: {event!r}")


class SnapshotContainer:
    """Holds the current selection and its most recently computed snapshot."""

    def __init__(
        self,
        calculator: Optional[SnapshotCalculator] = None,
        selection: Optional[Selection] = None,
    ) -> None:
        self._calculator = calculator or SnapshotCalculator()
        self._state = initial_state(self._calculator, selection)
        self._observers: list[Observer] = []

    @property
    def state(self) -> DashboardState:
        return self._state

    def get_snapshot(self) -> Snapshot:
        return self._state.snapshot

    def get_selection(self) -> Selection:
        return self._state.selection

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """Register an observer; returns a callable that removes it again."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def dispatch(self, event: DashboardEvent) -> DashboardState:
        previous = self._state
        self._state = reduce(previous, event, self._calculator)
        for observer in list(self._observers):
            try:
                observer(previous, self._state, event)
            except Exception:
                logger.exception("Dashboard observer failed for %r", event)
        return self._state

    def set_timeframe(self, timeframe: Timeframe | str) -> None:
        self.dispatch(SetTimeframe(Timeframe(timeframe)))

    def set_location(self, location: Location | str) -> None:
        self.dispatch(SetLocation(Location(location)))

    def toggle_compare(self) -> None:
        self.dispatch(ToggleCompare())

    def set_focus(self, focus: Focus | str) -> None:
        self.dispatch(SetFocus(Focus(focus)))
