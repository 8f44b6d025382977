"""
Result projection: entity arenas and accumulators -> rows, series and metrics.

Internal times are minutes; everything leaving this module is in hours.
"""
import math
from typing import Any, Dict, List

from .models import (
    BancoParams, Entity, EstacionamientoParams, SerieParams, SimulationOutput, TimeSeries,
)
from .statistics import AreaIntegrator, OccupancyHistogram, SojournTally, Trace

MIN_PER_HOUR = 60.0
T_FLOOR = 1e-12

SERIE_COLUMNS = ["ID", "tLlegada(h)", "IniS1(h)", "FinS1(h)", "IniS2(h)", "FinS2(h)", "TSist(h)"]
BANCO_COLUMNS = ["ID", "tLlegada(h)", "tInicioServ(h)", "tSalida(h)", "TiempoCola(h)",
                 "TiempoServ(h)", "TiempoSist(h)", "Cajero"]
ESTACIONAMIENTO_COLUMNS = ["ID", "tLlegada(h)", "Resultado", "Lugar", "tInicio(h)",
                           "tSalida(h)", "Duración(h)", "Ocupados"]


def to_hours(minutes: float) -> float:
    return minutes / MIN_PER_HOUR


def mean_hours(sojourn: SojournTally) -> float:
    # same per-entity values the rows carry, so fsum(rows)/count matches exactly
    if not sojourn.count:
        return 0.0
    return math.fsum(to_hours(v) for v in sojourn.values) / sojourn.count


def to_series(trace: Trace) -> TimeSeries:
    return TimeSeries(
        name=trace.name,
        x_hours=[to_hours(t) for t, _ in trace.points],
        y=[v for _, v in trace.points],
    )


# ---------- Serie ----------
def metrics_serie(p: SerieParams, end: float, areas: AreaIntegrator,
                  sojourn: SojournTally, max_q1: int, max_q2: int) -> Dict[str, Any]:
    T = max(end, T_FLOOR)
    return {
        "cierre_h": p.cierre_hours,
        "fin_real_h": to_hours(end),
        "atendidos": sojourn.count,
        "Lq1": areas.time_average("q1", T),
        "Lq2": areas.time_average("q2", T),
        "rho1": areas.time_average("b1", T),
        "rho2": areas.time_average("b2", T),
        "W_prom_h": mean_hours(sojourn),
        "maxQ1": max_q1,
        "maxQ2": max_q2,
    }


def project_serie(entities: List[Entity], metrics: Dict[str, Any],
                  traces: List[Trace]) -> SimulationOutput:
    rows = []
    for e in entities:
        if len(e.service_end) < 2:
            continue  # only finished customers
        rows.append((
            e.id,
            to_hours(e.arrival),
            to_hours(e.service_start[0]),
            to_hours(e.service_end[0]),
            to_hours(e.service_start[1]),
            to_hours(e.service_end[1]),
            to_hours(e.sojourn),
        ))
    return SimulationOutput(kind="serie", columns=SERIE_COLUMNS, rows=rows, metrics=metrics,
                            series=[to_series(t) for t in traces], entities=entities)


# ---------- Banco ----------
def metrics_banco(p: BancoParams, end: float, areas: AreaIntegrator, sojourn: SojournTally,
                  entities: List[Entity], max_q: int) -> Dict[str, Any]:
    T = max(end, T_FLOOR)
    n = p.numero_cajeros
    served = [e for e in entities if e.departed]
    waits = [e.service_start[0] - e.arrival for e in served]

    metrics: Dict[str, Any] = {
        "cierre_h": p.cierre_hours,
        "fin_real_h": to_hours(end),
        "atendidos": sojourn.count,
        "Lq": areas.time_average("q", T),
        "Ls": areas.time_average("sys", T),
        "rho": math.fsum(areas.area[f"b{k}"] for k in range(n)) / (n * T),
    }
    for k in range(n):
        metrics[f"rho_cajero_{k + 1}"] = areas.time_average(f"b{k}", T)
    metrics["Wq_prom_h"] = to_hours(math.fsum(waits) / len(waits)) if waits else 0.0
    metrics["W_prom_h"] = mean_hours(sojourn)
    metrics["maxQ"] = max_q
    return metrics


def project_banco(entities: List[Entity], metrics: Dict[str, Any],
                  traces: List[Trace]) -> SimulationOutput:
    rows = []
    for e in entities:
        if not e.service_end:
            continue
        start, dep = e.service_start[0], e.service_end[0]
        rows.append((
            e.id,
            to_hours(e.arrival),
            to_hours(start),
            to_hours(dep),
            to_hours(start - e.arrival),
            to_hours(dep - start),
            to_hours(dep - e.arrival),
            e.server + 1,
        ))
    return SimulationOutput(kind="banco", columns=BANCO_COLUMNS, rows=rows, metrics=metrics,
                            series=[to_series(t) for t in traces], entities=entities)


# ---------- Estacionamiento ----------
def metrics_estacionamiento(p: EstacionamientoParams, end: float, histogram: OccupancyHistogram,
                            arrived: int, served: int, lost: int) -> Dict[str, Any]:
    T = max(histogram.horizon, T_FLOOR)
    p_full = histogram.p_full(T)
    mean_occ = histogram.mean_occupancy(T)
    return {
        "cierre_h": p.cierre_hours,
        "fin_real_h": to_hours(end),
        "llegadas": arrived,
        "atendidos": served,
        "perdidos": lost,
        "perdidos_pct": 100 * lost / arrived if arrived > 0 else 0.0,
        "p_disponible_pct": 100 * (1 - p_full),
        "p_lleno_pct": 100 * p_full,
        "ocupados_prom": mean_occ,
        "libres_prom": p.capacidad - mean_occ,
        "tiempo_en_estado_h": [to_hours(t) for t in histogram.time_at_level],
    }


def project_estacionamiento(entities: List[Entity], metrics: Dict[str, Any],
                            traces: List[Trace]) -> SimulationOutput:
    rows = []
    for e in entities:
        if e.occupancy_at_arrival is None:
            continue  # never processed
        if e.lost:
            rows.append((e.id, to_hours(e.arrival), "Perdido", None, None, None, None,
                         e.occupancy_at_arrival))
            continue
        start, end = e.service_start[0], e.service_end[0]
        rows.append((
            e.id,
            to_hours(e.arrival),
            "Atendido",
            e.server,
            to_hours(start),
            to_hours(end),
            to_hours(end - start),
            e.occupancy_at_arrival,
        ))
    return SimulationOutput(kind="estacionamiento", columns=ESTACIONAMIENTO_COLUMNS, rows=rows,
                            metrics=metrics, series=[to_series(t) for t in traces],
                            entities=entities)
