import logging
from typing import Callable, Dict, Optional

from .distributions import sample_interarrival
from .events import Event, EventKind, EventList

logger = logging.getLogger(__name__)

Handler = Callable[[Event], None]


class ArrivalProcess:
    """Poisson arrivals in minutes; candidates past closing are dropped."""

    def __init__(self, lambda_per_hour: float, closing_min: float, rng):
        self.lambda_per_hour = lambda_per_hour
        self.closing_min = closing_min
        self.rng = rng

    def next_after(self, t: float) -> Optional[float]:
        candidate = t + sample_interarrival(self.lambda_per_hour, self.rng)
        return candidate if candidate <= self.closing_min else None


class EventLoop:
    """
    Generic discrete-event driver shared by the service-system variants.

    For every event, in order:
      1. before_advance(t)  - integrate areas with the state of the elapsed interval
      2. clock = t
      3. observe(t)         - sample traces before the state changes
      4. handlers[kind](event)
    """

    def __init__(self,
                 handlers: Dict[EventKind, Handler],
                 before_advance: Optional[Callable[[float], None]] = None,
                 observe: Optional[Callable[[float], None]] = None):
        self.events = EventList()
        self.clock = 0.0
        self.handlers = handlers
        self.before_advance = before_advance
        self.observe = observe
        self.processed = 0

    def schedule(self, time: float, kind: EventKind,
                 entity_id: Optional[int] = None, station: Optional[int] = None) -> None:
        self.events.schedule(Event(time=time, kind=kind, entity_id=entity_id, station=station))

    def run(self) -> float:
        while self.events:
            event = self.events.pop_earliest()
            if self.before_advance is not None:
                self.before_advance(event.time)
            self.clock = event.time
            if self.observe is not None:
                self.observe(self.clock)

            logger.debug("t=%.4f %s entity=%s station=%s",
                         event.time, event.kind.value, event.entity_id, event.station)
            self.handlers[event.kind](event)
            self.processed += 1

        return self.clock
