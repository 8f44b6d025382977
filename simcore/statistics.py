import math
from typing import Dict, Iterable, List, Tuple


class AreaIntegrator:
    """
    Areas under several piecewise-constant curves sharing one time axis.

    integrate() must be called with the levels that held during the elapsed
    interval, i.e. before the state is mutated for the new event.
    """

    def __init__(self, names: Iterable[str]):
        self.area: Dict[str, float] = {name: 0.0 for name in names}
        self.t_last = 0.0

    def integrate(self, t_new: float, levels: Dict[str, float]) -> None:
        dt = t_new - self.t_last
        if dt > 0:
            for name, level in levels.items():
                self.area[name] += level * dt
            self.t_last = t_new

    def time_average(self, name: str, total_time: float) -> float:
        return self.area[name] / total_time


class OccupancyHistogram:
    """Time spent at each occupancy level 0..capacity, clipped at horizon."""

    def __init__(self, capacity: int, horizon: float):
        self.capacity = capacity
        self.horizon = horizon
        self.time_at_level: List[float] = [0.0] * (capacity + 1)
        self.area = 0.0
        self.t_last = 0.0

    def integrate(self, t_new: float, level: int) -> None:
        t2 = min(t_new, self.horizon)
        dt = t2 - self.t_last
        if dt > 0:
            self.time_at_level[level] += dt
            self.area += level * dt
            self.t_last = t2

    def p_full(self, total_time: float) -> float:
        return self.time_at_level[self.capacity] / total_time

    def mean_occupancy(self, total_time: float) -> float:
        return self.area / total_time


class SojournTally:
    """Per-entity durations; the mean uses fsum so it does not depend on departure order."""

    def __init__(self):
        self.values: List[float] = []

    def record(self, value: float) -> None:
        self.values.append(value)

    @property
    def count(self) -> int:
        return len(self.values)

    @property
    def total(self) -> float:
        return math.fsum(self.values)

    def mean(self) -> float:
        return self.total / self.count if self.values else 0.0


class Trace:
    """(time, value) samples taken at every clock advance."""

    def __init__(self, name: str):
        self.name = name
        self.points: List[Tuple[float, float]] = []

    def record(self, t: float, value: float) -> None:
        self.points.append((t, value))
