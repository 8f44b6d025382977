import pytest

from simcore.statistics import AreaIntegrator, OccupancyHistogram, SojournTally, Trace


def test_area_integrator_uses_levels_of_elapsed_interval():
    areas = AreaIntegrator(["q", "busy"])
    areas.integrate(2.0, {"q": 0, "busy": 1})
    areas.integrate(5.0, {"q": 2, "busy": 1})
    areas.integrate(5.0, {"q": 7, "busy": 0})   # dt == 0 adds nothing
    areas.integrate(6.0, {"q": 1, "busy": 0})

    assert areas.area == {"q": 7.0, "busy": 5.0}
    assert areas.t_last == 6.0
    assert areas.time_average("busy", 6.0) == pytest.approx(5 / 6)


def test_histogram_clips_at_horizon():
    h = OccupancyHistogram(capacity=2, horizon=10.0)
    h.integrate(3.0, 0)
    h.integrate(8.0, 2)
    h.integrate(15.0, 1)   # only 2 minutes count
    h.integrate(20.0, 0)   # past horizon, nothing

    assert h.time_at_level == [3.0, 2.0, 5.0]
    assert sum(h.time_at_level) == 10.0
    assert h.area == 12.0
    assert h.p_full(10.0) == 0.5
    assert h.mean_occupancy(10.0) == 1.2


def test_sojourn_tally_mean_is_order_independent():
    values = [0.1, 0.2, 0.3, 1e-9, 7.25]
    a, b = SojournTally(), SojournTally()
    for v in values:
        a.record(v)
    for v in reversed(values):
        b.record(v)
    assert a.count == 5
    assert a.mean() == b.mean()


def test_empty_tally_mean_is_zero():
    assert SojournTally().mean() == 0.0


def test_trace_records_points():
    t = Trace("Cola")
    t.record(0.5, 1)
    t.record(1.0, 0)
    assert t.points == [(0.5, 1), (1.0, 0)]
