"""
Long-run (steady-state) reference values for the three service systems.

The simulators report single-path estimates over a finite day; these closed
forms give the values those estimates should approach for long runs. Rates
are per minute.
"""
import math
from typing import List, Tuple

from .models import AnalyticalResult, BancoParams, EstacionamientoParams, SerieParams

INF = float("inf")


# ---------- Helper ----------
def r4(x: float) -> float:
    if x == INF:
        return x
    return round(float(x), 4)


def _scv(var: float, mean: float) -> float:
    # squared coefficient of variation
    if mean <= 0:
        return 0.0
    return var / (mean * mean)


def _uniform_moments(a: float, b: float) -> Tuple[float, float]:
    lo, hi = min(a, b), max(a, b)
    return (lo + hi) / 2.0, ((hi - lo) ** 2) / 12.0


def _unstable(model: str, lambda_: float, mu: float, rho: float) -> AnalyticalResult:
    return AnalyticalResult(
        model=model,
        interarrival_rate=r4(lambda_),
        service_rate=r4(mu),
        utilization=r4(rho),
        Lq=INF, Wq=INF, W=INF, L=INF,
        note="Unstable system (ρ ≥ 1)",
    )


# ---------- M/M/1 ----------
def mm1(lambda_: float, mu: float) -> AnalyticalResult:
    rho = lambda_ / mu
    if rho >= 1.0:
        return _unstable("M/M/1", lambda_, mu, rho)

    Lq = (rho * rho) / (1.0 - rho)
    Wq = Lq / lambda_
    W = Wq + (1.0 / mu)
    L = lambda_ * W
    return AnalyticalResult(
        model="M/M/1",
        interarrival_rate=r4(lambda_),
        service_rate=r4(mu),
        utilization=r4(rho),
        Lq=r4(Lq), Wq=r4(Wq), W=r4(W), L=r4(L),
    )


# ---------- M/G/1 (Pollaczek–Khinchine) ----------
def mg1(lambda_: float, ES: float, varS: float) -> AnalyticalResult:
    mu = 1.0 / ES
    rho = lambda_ * ES
    if rho >= 1.0:
        return _unstable("M/G/1", lambda_, mu, rho)

    ES2 = varS + ES * ES
    Wq = (lambda_ * ES2) / (2.0 * (1.0 - rho))
    Lq = lambda_ * Wq
    W = Wq + ES
    L = lambda_ * W
    return AnalyticalResult(
        model="M/G/1",
        interarrival_rate=r4(lambda_),
        service_rate=r4(mu),
        utilization=r4(rho),
        Lq=r4(Lq), Wq=r4(Wq), W=r4(W), L=r4(L),
    )


# ---------- Erlang C / B ----------
def erlang_c(lambda_: float, mu: float, c: int) -> float:
    """Probability that an arrival must wait in M/M/c (requires lambda < c*mu)."""
    a = lambda_ / mu  # offered load

    s = 0.0
    for n in range(c):
        s += (a ** n) / math.factorial(n)
    last = (a ** c) / math.factorial(c) * (c / (c - a))

    P0 = 1.0 / (s + last)
    return last * P0


def erlang_b(a: float, c: int) -> float:
    """
    Blocking probability of M/G/c/c with offered load a = lambda * E[S].

    Uses the recursion B(0) = 1, B(k) = a*B(k-1) / (k + a*B(k-1)),
    which stays stable for large c.
    """
    b = 1.0
    for k in range(1, c + 1):
        b = a * b / (k + a * b)
    return b


# ---------- M/G/c (Allen–Cunneen approximation) ----------
def mgc(lambda_: float, ES: float, varS: float, c: int) -> AnalyticalResult:
    """
    Wq(M/G/c) ≈ ((1 + Cs^2) / 2) * Wq(M/M/c), Cs^2 = Var(S) / E[S]^2.
    """
    mu = 1.0 / ES
    rho = lambda_ / (c * mu)
    if rho >= 1.0:
        return _unstable("M/G/c", lambda_, mu, rho)

    Pw = erlang_c(lambda_, mu, c)
    Wq = ((1.0 + _scv(varS, ES)) / 2.0) * Pw / (c * mu - lambda_)
    Lq = lambda_ * Wq
    W = Wq + ES
    L = lambda_ * W
    return AnalyticalResult(
        model="M/G/c",
        interarrival_rate=r4(lambda_),
        service_rate=r4(mu),
        utilization=r4(rho),
        Lq=r4(Lq), Wq=r4(Wq), W=r4(W), L=r4(L),
        note="Allen–Cunneen approximation",
    )


# ---------- Per-system references ----------
def reference_serie(p: SerieParams) -> List[AnalyticalResult]:
    lambda_ = p.lambda_per_hour / 60.0
    station1 = mm1(lambda_, 1.0 / p.mu1_mean_min)
    # by Burke's theorem station 2 also sees Poisson arrivals when station 1 is stable
    ES2, varS2 = _uniform_moments(p.s2_min_min, p.s2_max_min)
    if ES2 <= 0:
        return [station1]
    return [station1, mg1(lambda_, ES2, varS2)]


def reference_banco(p: BancoParams) -> AnalyticalResult:
    lambda_ = p.lambda_per_hour / 60.0
    ES, varS = _uniform_moments(p.s_min_min, p.s_max_min)
    if ES <= 0:
        return AnalyticalResult(
            model="M/G/c", interarrival_rate=r4(lambda_), service_rate=INF,
            utilization=0.0, Lq=0.0, Wq=0.0, W=0.0, L=0.0,
            note="Zero service time",
        )
    return mgc(lambda_, ES, varS, p.numero_cajeros)


def reference_estacionamiento(p: EstacionamientoParams) -> AnalyticalResult:
    lambda_ = p.lambda_per_hour / 60.0
    ES, _ = _uniform_moments(p.s_min_min, p.s_max_min)
    c = p.capacidad
    a = lambda_ * ES
    p_block = erlang_b(a, c)

    # carried load = mean number of occupied slots
    L = a * (1.0 - p_block)
    return AnalyticalResult(
        model="M/G/c/c",
        interarrival_rate=r4(lambda_),
        service_rate=r4(1.0 / ES) if ES > 0 else INF,
        utilization=r4(L / c),
        Lq=0.0,
        Wq=0.0,
        W=r4(ES),
        L=r4(L),
        p_block=r4(p_block),
        note="Erlang B (insensitive to the duration distribution)",
    )
