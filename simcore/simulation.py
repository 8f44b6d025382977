from typing import Callable, Dict, Union

from .banco import run_banco
from .estacionamiento import run_estacionamiento
from .models import BancoParams, EstacionamientoParams, SerieParams, SimulationOutput
from .serie import run_serie

Params = Union[SerieParams, BancoParams, EstacionamientoParams]

RUNNERS: Dict[str, Callable[..., SimulationOutput]] = {
    "serie": run_serie,
    "banco": run_banco,
    "estacionamiento": run_estacionamiento,
}

PARAM_TYPES = {
    "serie": SerieParams,
    "banco": BancoParams,
    "estacionamiento": EstacionamientoParams,
}


def simulate(kind: str, params: Params) -> SimulationOutput:
    kind = kind.strip().lower()
    if kind not in RUNNERS:
        raise ValueError(f"Unknown system kind: {kind}")
    if not isinstance(params, PARAM_TYPES[kind]):
        raise ValueError(f"{kind} expects {PARAM_TYPES[kind].__name__}, got {type(params).__name__}")
    return RUNNERS[kind](params)
