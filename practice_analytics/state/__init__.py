from .container import (
    DashboardState,
    Selection,
    SetFocus,
    SetLocation,
    SetTimeframe,
    SnapshotContainer,
    ToggleCompare,
    reduce,
)

__all__ = [
    "DashboardState",
    "Selection",
    "SetFocus",
    "SetLocation",
    "SetTimeframe",
    "SnapshotContainer",
    "ToggleCompare",
    "reduce",
]
