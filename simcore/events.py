from bisect import bisect_right
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


class EventKind(Enum):
    ARRIVAL = "arrival"
    SERVICE_END = "service_end"


@dataclass(frozen=True)
class Event:
    time: float
    kind: EventKind
    entity_id: Optional[int] = None
    station: Optional[int] = None   # serie: 1 or 2


class EventList:
    """
    Time-ordered event list.

    Ties keep insertion order: a new event goes after every pending event
    whose time is <= its own, so two events at the same instant are
    processed in the order they were scheduled.
    """

    def __init__(self):
        self._events: List[Event] = []
        self._times: List[float] = []

    def schedule(self, event: Event) -> None:
        i = bisect_right(self._times, event.time)
        self._times.insert(i, event.time)
        self._events.insert(i, event)

    def pop_earliest(self) -> Event:
        if not self._events:
            raise IndexError("pop from empty event list")
        self._times.pop(0)
        return self._events.pop(0)

    def peek(self) -> Optional[Event]:
        return self._events[0] if self._events else None

    def __len__(self) -> int:
        return len(self._events)

    def __bool__(self) -> bool:
        return bool(self._events)
