from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple

SystemKind = Literal["serie", "banco", "estacionamiento"]
GeneratorKind = Literal["lcg32", "mixed", "minstd", "ansi", "mulberry32"]

# ---------- Run parameters (rates per hour, durations in minutes) ----------
@dataclass
class BaseParams:
    cierre_hours: float              # no arrivals admitted after this
    seed: Optional[int] = None       # None -> not reproducible
    generator: GeneratorKind = "lcg32"

@dataclass
class SerieParams(BaseParams):
    lambda_per_hour: float = 20.0
    mu1_mean_min: float = 2.0        # station 1: Exp(mean)
    s2_min_min: float = 1.0          # station 2: Uniform[min,max]
    s2_max_min: float = 3.0

@dataclass
class BancoParams(BaseParams):
    lambda_per_hour: float = 40.0
    numero_cajeros: int = 3
    s_min_min: float = 0.0
    s_max_min: float = 1.0

@dataclass
class EstacionamientoParams(BaseParams):
    lambda_per_hour: float = 10.0
    capacidad: int = 6
    s_min_min: float = 10.0
    s_max_min: float = 30.0

# ---------- Entities (times in minutes) ----------
@dataclass
class Entity:
    id: int
    arrival: float
    service_start: List[float] = field(default_factory=list)
    service_end: List[float] = field(default_factory=list)
    server: Optional[int] = None     # teller or slot index, 0-based
    lost: bool = False
    occupancy_at_arrival: Optional[int] = None   # loss system only

    @property
    def departed(self) -> bool:
        return bool(self.service_end) and not self.lost

    @property
    def sojourn(self) -> Optional[float]:
        return self.service_end[-1] - self.arrival if self.service_end else None

# ---------- Output ----------
@dataclass
class TimeSeries:
    name: str
    x_hours: List[float]
    y: List[float]

@dataclass
class AnalyticalResult:
    model: str
    interarrival_rate: float  # lambda (per minute)
    service_rate: float       # mu (per minute)
    utilization: float        # rho
    Lq: float
    Wq: float
    W: float
    L: float
    p_block: Optional[float] = None
    note: Optional[str] = None

@dataclass
class SimulationOutput:
    kind: SystemKind
    columns: List[str]
    rows: List[Tuple[Any, ...]]
    metrics: Dict[str, Any]
    series: List[TimeSeries]
    entities: List[Entity] = field(default_factory=list)
    reference: List[AnalyticalResult] = field(default_factory=list)
