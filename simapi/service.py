import logging
from typing import Any, Dict, Iterable, List

from pydantic import TypeAdapter

from simapi.schemas import (
    BaseRequest, Reference, SimulationRequest, SimulationResponse, TimeSeries,
)
from simcore.simulation import PARAM_TYPES, simulate

logger = logging.getLogger(__name__)

_request_adapter = TypeAdapter(SimulationRequest)


def _to_core_params(req: BaseRequest):
    # convert pydantic schema -> core dataclass
    fields = req.model_dump(exclude={"kind"})
    return PARAM_TYPES[req.kind](**fields)


def parse_request(payload: Dict[str, Any]) -> BaseRequest:
    """Validate a raw dict; raises pydantic.ValidationError on bad configuration."""
    return _request_adapter.validate_python(payload)


def run(req: BaseRequest) -> SimulationResponse:
    logger.info("running %s (seed=%s, generator=%s)", req.kind, req.seed, req.generator)
    res = simulate(req.kind, _to_core_params(req))

    # convert dataclasses -> dicts for pydantic response
    return SimulationResponse(
        kind=res.kind,
        columns=res.columns,
        rows=[list(r) for r in res.rows],
        metrics=res.metrics,
        series=[TimeSeries(**s.__dict__) for s in res.series],
        reference=[Reference(**a.__dict__) for a in res.reference],
    )


def run_dict(payload: Dict[str, Any]) -> SimulationResponse:
    return run(parse_request(payload))


def sweep(req: BaseRequest, field: str, values: Iterable[Any]) -> List[SimulationResponse]:
    """
    Independent runs varying one parameter. Every run builds its own
    generator from req.seed, so runs share no state.
    """
    if field == "kind" or field not in type(req).model_fields:
        raise ValueError(f"Unknown parameter for {req.kind}: {field}")

    results = []
    for v in values:
        data = req.model_dump()
        data[field] = v
        results.append(run(parse_request(data)))
    return results
