import logging
from collections import deque
from typing import Deque, List

from .analytical import reference_banco
from .distributions import sample_interarrival, sample_uniform
from .engine import ArrivalProcess, EventLoop
from .events import Event, EventKind
from .models import BancoParams, Entity, SimulationOutput
from .projection import metrics_banco, project_banco
from .rng import make_generator
from .statistics import AreaIntegrator, SojournTally, Trace
from .validators import check_banco

logger = logging.getLogger(__name__)


class _BancoRun:
    """N identical tellers fed by one shared FIFO queue."""

    def __init__(self, p: BancoParams):
        self.p = p
        self.n = p.numero_cajeros
        self.rng = make_generator(p.seed, p.generator)
        self.closing_min = p.cierre_hours * 60.0
        self.arrivals = ArrivalProcess(p.lambda_per_hour, self.closing_min, self.rng)

        self.entities: List[Entity] = []
        self.queue: Deque[int] = deque()
        self.busy: List[bool] = [False] * self.n
        self.max_q = 0

        self.areas = AreaIntegrator(["q", "sys"] + [f"b{k}" for k in range(self.n)])
        self.sojourn = SojournTally()
        self.trace_q = Trace("Cola Banco")

        self.loop = EventLoop(
            handlers={
                EventKind.ARRIVAL: self.on_arrival,
                EventKind.SERVICE_END: self.on_service_end,
            },
            before_advance=self.integrate,
            observe=lambda t: self.trace_q.record(t, len(self.queue)),
        )

    def integrate(self, t_new: float) -> None:
        levels = {f"b{k}": 1 if b else 0 for k, b in enumerate(self.busy)}
        levels["q"] = len(self.queue)
        levels["sys"] = len(self.queue) + sum(self.busy)
        self.areas.integrate(t_new, levels)

    def free_teller(self) -> int:
        for k, b in enumerate(self.busy):
            if not b:
                return k
        return -1

    def start_service(self, eid: int, teller: int) -> None:
        e = self.entities[eid - 1]
        now = self.loop.clock
        e.server = teller
        self.busy[teller] = True
        end = now + sample_uniform(self.p.s_min_min, self.p.s_max_min, self.rng)
        e.service_start.append(now)
        e.service_end.append(end)
        self.loop.schedule(end, EventKind.SERVICE_END, entity_id=eid)

    def schedule_arrival(self, t: float) -> None:
        # the record exists from the moment the arrival is scheduled
        eid = len(self.entities) + 1
        self.entities.append(Entity(id=eid, arrival=t))
        self.loop.schedule(t, EventKind.ARRIVAL, entity_id=eid)

    def on_arrival(self, event: Event) -> None:
        teller = self.free_teller()
        if teller != -1:
            self.start_service(event.entity_id, teller)
        else:
            self.queue.append(event.entity_id)
            self.max_q = max(self.max_q, len(self.queue))

        t_next = self.arrivals.next_after(self.loop.clock)
        if t_next is not None:
            self.schedule_arrival(t_next)

    def on_service_end(self, event: Event) -> None:
        e = self.entities[event.entity_id - 1]
        self.sojourn.record(self.loop.clock - e.arrival)
        self.busy[e.server] = False
        if self.queue:
            self.start_service(self.queue.popleft(), e.server)

    def run(self) -> SimulationOutput:
        t1 = sample_interarrival(self.p.lambda_per_hour, self.rng)
        if t1 <= self.closing_min:
            self.schedule_arrival(t1)

        end = self.loop.run()
        logger.info("banco: seed=%s tellers=%d entities=%d served=%d end=%.3f min",
                    self.p.seed, self.n, len(self.entities), self.sojourn.count, end)

        metrics = metrics_banco(self.p, end, self.areas, self.sojourn, self.entities, self.max_q)
        return project_banco(self.entities, metrics, [self.trace_q])


def run_banco(p: BancoParams) -> SimulationOutput:
    check_banco(p)
    out = _BancoRun(p).run()
    out.reference = [reference_banco(p)]
    return out
