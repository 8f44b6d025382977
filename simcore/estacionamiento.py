import logging
from typing import List, Optional

from .analytical import reference_estacionamiento
from .distributions import sample_interarrival, sample_uniform
from .engine import ArrivalProcess, EventLoop
from .events import Event, EventKind
from .models import Entity, EstacionamientoParams, SimulationOutput
from .projection import metrics_estacionamiento, project_estacionamiento
from .rng import make_generator
from .statistics import OccupancyHistogram, Trace
from .validators import check_estacionamiento

logger = logging.getLogger(__name__)


class _EstacionamientoRun:
    """C slots and no queue: an arrival that finds every slot taken is lost."""

    def __init__(self, p: EstacionamientoParams):
        self.p = p
        self.c = p.capacidad
        self.rng = make_generator(p.seed, p.generator)
        self.closing_min = p.cierre_hours * 60.0
        self.arrivals = ArrivalProcess(p.lambda_per_hour, self.closing_min, self.rng)

        self.entities: List[Entity] = []
        self.slots: List[Optional[int]] = [None] * self.c
        self.occupied = 0
        self.arrived = 0
        self.served = 0
        self.lost = 0

        self.histogram = OccupancyHistogram(self.c, self.closing_min)
        self.trace_occ = Trace("Ocupación")

        self.loop = EventLoop(
            handlers={
                EventKind.ARRIVAL: self.on_arrival,
                EventKind.SERVICE_END: self.on_departure,
            },
            before_advance=lambda t: self.histogram.integrate(t, self.occupied),
            observe=lambda t: self.trace_occ.record(t, self.occupied),
        )

    def first_free(self) -> int:
        for idx, holder in enumerate(self.slots):
            if holder is None:
                return idx
        return -1

    def schedule_arrival(self, t: float) -> None:
        eid = len(self.entities) + 1
        self.entities.append(Entity(id=eid, arrival=t))
        self.loop.schedule(t, EventKind.ARRIVAL, entity_id=eid)

    def on_arrival(self, event: Event) -> None:
        now = self.loop.clock
        e = self.entities[event.entity_id - 1]
        self.arrived += 1

        idx = self.first_free()
        if idx != -1:
            self.slots[idx] = e.id
            self.occupied += 1
            self.served += 1
            end = now + sample_uniform(self.p.s_min_min, self.p.s_max_min, self.rng)
            e.server = idx
            e.service_start.append(now)
            e.service_end.append(end)
            self.loop.schedule(end, EventKind.SERVICE_END, entity_id=e.id)
        else:
            self.lost += 1
            e.lost = True
            logger.debug("estacionamiento: entity %d lost at t=%.4f", e.id, now)
        e.occupancy_at_arrival = self.occupied

        t_next = self.arrivals.next_after(now)
        if t_next is not None:
            self.schedule_arrival(t_next)

    def on_departure(self, event: Event) -> None:
        idx = self.entities[event.entity_id - 1].server
        if self.slots[idx] == event.entity_id:
            self.slots[idx] = None
            self.occupied -= 1

    def run(self) -> SimulationOutput:
        t1 = sample_interarrival(self.p.lambda_per_hour, self.rng)
        if t1 <= self.closing_min:
            self.schedule_arrival(t1)

        end = self.loop.run()
        # tail interval up to closing when the last event came earlier
        self.histogram.integrate(self.closing_min, self.occupied)

        logger.info("estacionamiento: seed=%s capacity=%d arrivals=%d lost=%d end=%.3f min",
                    self.p.seed, self.c, self.arrived, self.lost, end)

        metrics = metrics_estacionamiento(self.p, end, self.histogram,
                                          self.arrived, self.served, self.lost)
        return project_estacionamiento(self.entities, metrics, [self.trace_occ])


def run_estacionamiento(p: EstacionamientoParams) -> SimulationOutput:
    check_estacionamiento(p)
    out = _EstacionamientoRun(p).run()
    out.reference = [reference_estacionamiento(p)]
    return out
