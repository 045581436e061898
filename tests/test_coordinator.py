"""Tests for LinkCoordinator hover routing."""

import pytest

from qtl_linkview.config import NAHandling, PanelOptions
from qtl_linkview.core.errors import ConfigurationError, OutOfDomainError
from qtl_linkview.layout.geometry import Rect
from qtl_linkview.link.coordinator import LinkCoordinator
from qtl_linkview.panels.curves import CurveChart
from qtl_linkview.panels.scatter import ScatterPlot


@pytest.fixture
def linked(canvas, frame, curves, scatters, entities):
    """Curves plus two scatters on one canvas, registered and attached."""
    rect = Rect(0.0, 0.0, frame.outer_width, frame.outer_height)
    chart = CurveChart(canvas.create_surface("curves", rect), frame)
    chart.bind(curves, entities)
    plots = []
    for name, data in zip(("scatter1", "scatter2"), scatters):
        plot = ScatterPlot(canvas.create_surface(name, rect), frame)
        plot.bind(data, entities)
        plots.append(plot)
    coordinator = LinkCoordinator()
    for panel in (chart, *plots):
        coordinator.register(panel)
    coordinator.attach()
    return coordinator, chart, plots


def _emphasized(coordinator):
    return {panel.name: set(panel.emphasized) for panel in coordinator.panels}


class TestEnterLeave:
    def test_enter_emphasizes_every_panel(self, linked):
        coordinator, chart, plots = linked
        coordinator.enter(1)
        assert coordinator.active == 1
        assert coordinator.state == "hovering"
        assert _emphasized(coordinator) == {"curves": {1}, "scatter1": {1}, "scatter2": {1}}

    def test_switching_keys_is_exclusive(self, linked):
        coordinator, _, _ = linked
        coordinator.enter(0)
        coordinator.enter(2)
        assert _emphasized(coordinator) == {"curves": {2}, "scatter1": {2}, "scatter2": {2}}

    def test_leave_returns_to_idle(self, linked):
        coordinator, _, _ = linked
        coordinator.enter(0)
        coordinator.leave(0)
        assert coordinator.active is None
        assert coordinator.state == "idle"
        assert all(not keys for keys in _emphasized(coordinator).values())

    def test_stale_leave_is_ignored(self, linked):
        coordinator, _, _ = linked
        coordinator.enter(2)
        coordinator.leave(0)
        assert coordinator.active == 2
        assert _emphasized(coordinator)["curves"] == {2}

    def test_reenter_is_a_noop(self, linked):
        coordinator, _, _ = linked
        changes = []
        coordinator.on_change(changes.append)
        coordinator.enter(1)
        coordinator.enter(1)
        assert changes == [1]

    def test_unknown_key_raises(self, linked):
        coordinator, _, _ = linked
        with pytest.raises(OutOfDomainError, match="No linked element"):
            coordinator.enter(99)

    def test_on_change_sequence(self, linked):
        coordinator, _, _ = linked
        changes = []
        coordinator.on_change(changes.append)
        coordinator.enter(0)
        coordinator.enter(1)
        coordinator.leave(1)
        assert changes == [0, 1, None]

    def test_routes_cover_every_panel(self, linked):
        coordinator, chart, plots = linked
        routes = coordinator.routes(1)
        assert [panel.name for panel, _ in routes] == ["curves", "scatter1", "scatter2"]
        assert routes[0][1] == chart.element_for(1)
        assert 1 in coordinator

    def test_undrawn_point_is_skipped(self, canvas, frame, curves, scatters, entities):
        rect = Rect(0.0, 0.0, frame.outer_width, frame.outer_height)
        chart = CurveChart(canvas.create_surface("curves", rect), frame)
        chart.bind(curves, entities)
        plot = ScatterPlot(canvas.create_surface("scatter2", rect), frame,
                           PanelOptions(x_na=NAHandling(handle=False)))
        plot.bind(scatters[1], entities)
        coordinator = LinkCoordinator()
        coordinator.register(chart)
        coordinator.register(plot)

        assert [panel.name for panel, _ in coordinator.routes(1)] == ["curves"]
        coordinator.enter(1)
        assert chart.is_emphasized(1)
        assert plot.emphasized == frozenset()

    def test_register_twice_raises(self, linked):
        coordinator, chart, _ = linked
        with pytest.raises(ConfigurationError, match="already registered"):
            coordinator.register(chart)


class TestPointerWiring:
    def test_pointer_drives_hover(self, canvas, linked):
        coordinator, chart, plots = linked
        canvas.pointer_move("curves", chart.element_for(0))
        assert coordinator.active == 0
        canvas.pointer_move("scatter1", plots[0].element_for(2))
        assert coordinator.active == 2
        assert _emphasized(coordinator) == {"curves": {2}, "scatter1": {2}, "scatter2": {2}}
        canvas.pointer_out()
        assert coordinator.active is None

    def test_exclusive_over_any_sequence(self, canvas, linked):
        coordinator, chart, plots = linked
        moves = [("curves", 0), ("scatter2", 1), ("scatter1", 1), ("curves", 2), ("scatter2", 0)]
        panels = {"curves": chart, "scatter1": plots[0], "scatter2": plots[1]}
        for name, key in moves:
            canvas.pointer_move(name, panels[name].element_for(key))
            active = set().union(*_emphasized(coordinator).values())
            assert active == {key}

    def test_detach_removes_listeners(self, canvas, linked):
        coordinator, chart, plots = linked
        coordinator.enter(1)
        coordinator.detach()
        assert not coordinator.attached
        assert coordinator.active is None
        assert all(s.listener_count() == 0 for s in canvas.surfaces)
        canvas.pointer_move("curves", chart.element_for(0))
        assert coordinator.active is None

    def test_attach_installs_enter_and_leave(self, canvas, linked):
        _, chart, plots = linked
        assert chart.surface.listener_count() == 2 * len(chart.keys())
        assert plots[1].surface.listener_count() == 2 * len(plots[1].keys())
