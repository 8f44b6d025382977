import logging
from collections import deque
from typing import Deque, List

from .analytical import reference_serie
from .distributions import sample_exponential, sample_interarrival, sample_uniform
from .engine import ArrivalProcess, EventLoop
from .events import Event, EventKind
from .models import Entity, SerieParams, SimulationOutput
from .projection import metrics_serie, project_serie
from .rng import make_generator
from .statistics import AreaIntegrator, SojournTally, Trace
from .validators import check_serie

logger = logging.getLogger(__name__)


class _SerieRun:
    """Two single-server stations in tandem, one FIFO queue in front of each."""

    def __init__(self, p: SerieParams):
        self.p = p
        self.rng = make_generator(p.seed, p.generator)
        self.closing_min = p.cierre_hours * 60.0
        self.arrivals = ArrivalProcess(p.lambda_per_hour, self.closing_min, self.rng)

        self.entities: List[Entity] = []
        self.q1: Deque[int] = deque()
        self.q2: Deque[int] = deque()
        self.s1_busy = False
        self.s2_busy = False
        self.max_q1 = 0
        self.max_q2 = 0

        self.areas = AreaIntegrator(["q1", "q2", "b1", "b2"])
        self.sojourn = SojournTally()
        self.trace_q1 = Trace("Cola 1")
        self.trace_q2 = Trace("Cola 2")

        self.loop = EventLoop(
            handlers={
                EventKind.ARRIVAL: self.on_arrival,
                EventKind.SERVICE_END: self.on_service_end,
            },
            before_advance=self.integrate,
            observe=self.observe,
        )

    def integrate(self, t_new: float) -> None:
        self.areas.integrate(t_new, {
            "q1": len(self.q1),
            "q2": len(self.q2),
            "b1": 1 if self.s1_busy else 0,
            "b2": 1 if self.s2_busy else 0,
        })

    def observe(self, t: float) -> None:
        self.trace_q1.record(t, len(self.q1))
        self.trace_q2.record(t, len(self.q2))

    def _entity(self, eid: int) -> Entity:
        return self.entities[eid - 1]

    def try_start_s1(self) -> None:
        if not self.s1_busy and self.q1:
            e = self._entity(self.q1.popleft())
            now = self.loop.clock
            self.s1_busy = True
            end = now + sample_exponential(self.p.mu1_mean_min, self.rng)
            e.service_start.append(now)
            e.service_end.append(end)
            self.loop.schedule(end, EventKind.SERVICE_END, entity_id=e.id, station=1)

    def try_start_s2(self) -> None:
        if not self.s2_busy and self.q2:
            e = self._entity(self.q2.popleft())
            now = self.loop.clock
            self.s2_busy = True
            end = now + sample_uniform(self.p.s2_min_min, self.p.s2_max_min, self.rng)
            e.service_start.append(now)
            e.service_end.append(end)
            self.loop.schedule(end, EventKind.SERVICE_END, entity_id=e.id, station=2)

    def on_arrival(self, event: Event) -> None:
        now = self.loop.clock
        eid = len(self.entities) + 1
        self.entities.append(Entity(id=eid, arrival=now))
        self.q1.append(eid)
        self.max_q1 = max(self.max_q1, len(self.q1))

        t_next = self.arrivals.next_after(now)
        if t_next is not None:
            self.loop.schedule(t_next, EventKind.ARRIVAL)

        self.try_start_s1()

    def on_service_end(self, event: Event) -> None:
        if event.station == 1:
            self.s1_busy = False
            self.q2.append(event.entity_id)
            self.max_q2 = max(self.max_q2, len(self.q2))
            self.try_start_s2()
            self.try_start_s1()
        else:
            self.s2_busy = False
            e = self._entity(event.entity_id)
            self.sojourn.record(self.loop.clock - e.arrival)
            self.try_start_s2()

    def run(self) -> SimulationOutput:
        t1 = sample_interarrival(self.p.lambda_per_hour, self.rng)
        if t1 <= self.closing_min:
            self.loop.schedule(t1, EventKind.ARRIVAL)

        end = self.loop.run()
        logger.info("serie: seed=%s entities=%d served=%d end=%.3f min",
                    self.p.seed, len(self.entities), self.sojourn.count, end)

        metrics = metrics_serie(self.p, end, self.areas, self.sojourn, self.max_q1, self.max_q2)
        return project_serie(self.entities, metrics, [self.trace_q1, self.trace_q2])


def run_serie(p: SerieParams) -> SimulationOutput:
    check_serie(p)
    out = _SerieRun(p).run()
    out.reference = reference_serie(p)
    return out
