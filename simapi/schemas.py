from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, model_validator

GeneratorKind = Literal["lcg32", "mixed", "minstd", "ansi", "mulberry32"]

# ---------- Requests (rates per hour, durations in minutes) ----------
class BaseRequest(BaseModel):
    cierre_hours: float = Field(8.0, gt=0, description="No arrivals admitted after this (hours)")
    seed: Optional[int] = Field(None, ge=0, examples=[20250915])
    generator: GeneratorKind = "lcg32"


class SerieRequest(BaseRequest):
    kind: Literal["serie"] = "serie"
    lambda_per_hour: float = Field(20.0, gt=0)
    mu1_mean_min: float = Field(2.0, gt=0)
    s2_min_min: float = Field(1.0, ge=0)
    s2_max_min: float = Field(3.0, ge=0)

    @model_validator(mode="after")
    def check_station2_range(self):
        if self.s2_min_min > self.s2_max_min:
            raise ValueError("s2_min_min must be <= s2_max_min")
        return self


class BancoRequest(BaseRequest):
    kind: Literal["banco"] = "banco"
    lambda_per_hour: float = Field(40.0, gt=0)
    numero_cajeros: int = Field(3, ge=1, le=1000)
    s_min_min: float = Field(0.0, ge=0)
    s_max_min: float = Field(1.0, ge=0)

    @model_validator(mode="after")
    def check_service_range(self):
        if self.s_min_min > self.s_max_min:
            raise ValueError("s_min_min must be <= s_max_min")
        return self


class EstacionamientoRequest(BaseRequest):
    kind: Literal["estacionamiento"] = "estacionamiento"
    lambda_per_hour: float = Field(10.0, gt=0)
    capacidad: int = Field(6, ge=1, le=100000)
    s_min_min: float = Field(10.0, ge=0)
    s_max_min: float = Field(30.0, ge=0)

    @model_validator(mode="after")
    def check_duration_range(self):
        if self.s_min_min > self.s_max_min:
            raise ValueError("s_min_min must be <= s_max_min")
        return self


SimulationRequest = Annotated[
    Union[SerieRequest, BancoRequest, EstacionamientoRequest],
    Field(discriminator="kind"),
]

# ---------- Responses ----------
class TimeSeries(BaseModel):
    name: str
    x_hours: List[float]
    y: List[float]


class Reference(BaseModel):
    model: str
    interarrival_rate: float
    service_rate: float
    utilization: float
    Lq: float
    Wq: float
    W: float
    L: float
    p_block: Optional[float] = None
    note: Optional[str] = None


class SimulationResponse(BaseModel):
    kind: str
    columns: List[str]
    rows: List[List[Any]]
    metrics: Dict[str, Any]
    series: List[TimeSeries]
    reference: List[Reference]
