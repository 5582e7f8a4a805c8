"""Tests for audit hooks -- dashboard changes to audit records."""

from practice_analytics.hooks.audit_hooks import audit_entry, make_audit_observer
from practice_analytics.state.container import SetFocus, SnapshotContainer


class TestAuditHooks:
    def test_observer_records_recomputation(self, calculator):
        sink = []
        container = SnapshotContainer(calculator=calculator)
        container.subscribe(make_audit_observer("dash-1", sink))
        container.set_location("Site A")

        [entry] = sink
        assert entry["dashboard_id"] == "dash-1"
        assert entry["event"] == "SetLocation"
        assert entry["location"] == "Site A"
        assert entry["timeframe"] == "90d"
        assert entry["recomputed"] is True

    def test_presentation_change_not_marked_recomputed(self, calculator):
        sink = []
        container = SnapshotContainer(calculator=calculator)
        container.subscribe(make_audit_observer("dash-1", sink))
        container.toggle_compare()
        assert sink[0]["event"] == "ToggleCompare"
        assert sink[0]["recomputed"] is False

    def test_audit_entry_has_timestamp(self, calculator):
        container = SnapshotContainer(calculator=calculator)
        state = container.state
        entry = audit_entry("dash-1", state, state, SetFocus("margin"))
        assert "timestamp" in entry

    def test_observer_without_sink(self, calculator):
        container = SnapshotContainer(calculator=calculator)
        container.subscribe(make_audit_observer("dash-1"))
        container.set_timeframe("30d")
        assert container.get_selection().timeframe.value == "30d"
