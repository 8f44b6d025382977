import pytest

from simcore.engine import ArrivalProcess, EventLoop
from simcore.events import Event, EventKind, EventList
from simcore.rng import make_generator


def test_pop_in_time_order():
    events = EventList()
    for t in [5.0, 1.0, 3.0, 2.0, 4.0]:
        events.schedule(Event(time=t, kind=EventKind.ARRIVAL))
    assert [events.pop_earliest().time for _ in range(5)] == [1.0, 2.0, 3.0, 4.0, 5.0]
    assert not events


def test_ties_keep_insertion_order():
    events = EventList()
    events.schedule(Event(time=2.0, kind=EventKind.SERVICE_END, entity_id=9))
    events.schedule(Event(time=1.0, kind=EventKind.ARRIVAL, entity_id=1))
    events.schedule(Event(time=1.0, kind=EventKind.SERVICE_END, entity_id=2))
    events.schedule(Event(time=1.0, kind=EventKind.ARRIVAL, entity_id=3))

    order = [events.pop_earliest().entity_id for _ in range(len(events))]
    assert order == [1, 2, 3, 9]


def test_peek_and_empty_pop():
    events = EventList()
    assert events.peek() is None
    events.schedule(Event(time=1.5, kind=EventKind.ARRIVAL))
    assert events.peek().time == 1.5
    assert len(events) == 1
    events.pop_earliest()
    with pytest.raises(IndexError):
        events.pop_earliest()


def test_loop_integrates_before_clock_moves():
    seen = []
    loop = None

    def before(t):
        seen.append(("before", loop.clock, t))

    def handle(event):
        seen.append(("handle", loop.clock, event.time))

    loop = EventLoop(handlers={EventKind.ARRIVAL: handle}, before_advance=before)
    loop.schedule(2.0, EventKind.ARRIVAL)
    loop.schedule(5.0, EventKind.ARRIVAL)
    end = loop.run()

    assert end == 5.0
    assert loop.processed == 2
    assert seen == [
        ("before", 0.0, 2.0), ("handle", 2.0, 2.0),
        ("before", 2.0, 5.0), ("handle", 5.0, 5.0),
    ]


def test_handlers_can_schedule_same_instant_events():
    order = []
    loop = None

    def on_arrival(event):
        order.append(("arrival", event.entity_id))
        if event.entity_id == 1:
            # scheduled later at the same instant -> processed after the pending arrival
            loop.schedule(loop.clock + 1.0, EventKind.SERVICE_END, entity_id=1)

    def on_end(event):
        order.append(("end", event.entity_id))

    loop = EventLoop(handlers={EventKind.ARRIVAL: on_arrival, EventKind.SERVICE_END: on_end})
    loop.schedule(1.0, EventKind.ARRIVAL, entity_id=1)
    loop.schedule(2.0, EventKind.ARRIVAL, entity_id=2)
    loop.run()

    assert order == [("arrival", 1), ("arrival", 2), ("end", 1)]


def test_arrival_process_respects_closing():
    arrivals = ArrivalProcess(lambda_per_hour=600.0, closing_min=10.0, rng=make_generator(3))
    t = 0.0
    times = []
    while True:
        nxt = arrivals.next_after(t)
        if nxt is None:
            break
        times.append(nxt)
        t = nxt
    assert times
    assert all(x <= 10.0 for x in times)
    assert times == sorted(times)
