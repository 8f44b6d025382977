import math
from typing import Dict, Sequence, Tuple

U_FLOOR = 1e-12
MIN_PER_HOUR = 60.0

# canonical two-segment pdf: f(x) = -x + 5/4 on [0,1], 1/4 on (1,2]
PIECEWISE_BREAK = 0.75


# ---------- Inverse transforms (u -> x) ----------
def triangular(u: float, lo: float, mode: float, hi: float) -> float:
    if hi == lo:
        return lo
    fc = (mode - lo) / (hi - lo)
    if u < fc:
        return lo + math.sqrt(u * (hi - lo) * (mode - lo))
    return hi - math.sqrt((1.0 - u) * (hi - lo) * (hi - mode))


def exponential_mean(u: float, mean: float) -> float:
    return -mean * math.log(max(u, U_FLOOR))


def exponential_rate(u: float, rate: float) -> float:
    return -math.log(max(u, U_FLOOR)) / rate


def interarrival_minutes(u: float, lambda_per_hour: float) -> float:
    # Exp(rate = lambda/60) in minutes
    return exponential_rate(u, lambda_per_hour / MIN_PER_HOUR)


def uniform(u: float, a: float, b: float) -> float:
    lo, hi = min(a, b), max(a, b)
    return lo + (hi - lo) * u


def discrete(u: float, values: Sequence[float], probabilities: Sequence[float]) -> float:
    """First value whose cumulative probability is >= u."""
    cumulative = 0.0
    for value, p in zip(values, probabilities):
        cumulative += p
        if u <= cumulative:
            return value
    # rounding shortfall in the cumulative sum
    return values[-1]


def piecewise_inverse(u: float) -> float:
    if u <= PIECEWISE_BREAK:
        # -x^2/2 + 5x/4 - u = 0, root in [0,1]
        a, b, c = -0.5, 1.25, -u
        return (-b + math.sqrt(b * b - 4.0 * a * c)) / (2.0 * a)
    return 4.0 * (u - 0.5)


def piecewise_pdf(x: float) -> float:
    if 0.0 <= x <= 1.0:
        return -x + 1.25
    if 1.0 < x <= 2.0:
        return 0.25
    return 0.0


def piecewise_cdf(x: float) -> float:
    if x < 0.0:
        return 0.0
    if x <= 1.0:
        return -0.5 * x * x + 1.25 * x
    if x <= 2.0:
        return PIECEWISE_BREAK + 0.25 * (x - 1.0)
    return 1.0


def normal(u1: float, u2: float, mean: float, std: float) -> float:
    # Box-Muller, first of the pair
    z = math.sqrt(-2.0 * math.log(max(u1, U_FLOOR))) * math.cos(2.0 * math.pi * u2)
    return mean + std * z


def erlang2(u1: float, u2: float, lam: float) -> float:
    # sum of two Exp(2*lam)
    return exponential_rate(u1, 2.0 * lam) + exponential_rate(u2, 2.0 * lam)


# ---------- Sampling from a generator ----------
def sample_triangular(lo: float, mode: float, hi: float, rng) -> float:
    return triangular(rng.next(), lo, mode, hi)


def sample_exponential(mean: float, rng) -> float:
    return exponential_mean(rng.next(), mean)


def sample_interarrival(lambda_per_hour: float, rng) -> float:
    return interarrival_minutes(rng.next(), lambda_per_hour)


def sample_uniform(a: float, b: float, rng) -> float:
    return uniform(rng.next(), a, b)


def sample_discrete(values: Sequence[float], probabilities: Sequence[float], rng) -> float:
    return discrete(rng.next(), values, probabilities)


def sample_piecewise(rng) -> float:
    return piecewise_inverse(rng.next())


def sample_from_spec(spec: Dict, rng) -> Tuple[float, float, str]:
    """
    Returns: (value, u, lookup)
    u is the first U(0,1) drawn, kept for traceability tables.
    """
    u = rng.next()
    dist_type = spec["dist_type"].strip().lower()
    p = spec["params"]

    if dist_type == "exponential":
        value = exponential_mean(u, p["mean"]) if "mean" in p else exponential_rate(u, p["rate"])
        lookup = "InverseExp(U)"
    elif dist_type == "uniform":
        value = uniform(u, p["min"], p["max"])
        lookup = "Uniform[min,max]"
    elif dist_type == "triangular":
        value = triangular(u, p["min"], p["mode"], p["max"])
        lookup = "InverseTriangular(U)"
    elif dist_type == "discrete":
        value = discrete(u, p["values"], p["probabilities"])
        lookup = "CumulativeSearch(U)"
    elif dist_type == "normal":
        value = normal(u, rng.next(), p["mean"], p["std"])
        lookup = "BoxMuller(U1,U2)"
    else:
        raise ValueError(f"Unknown dist_type: {dist_type}")

    return value, u, lookup


def mean_variance_from_spec(spec: Dict) -> Tuple[float, float]:
    dist_type = spec["dist_type"].strip().lower()
    p = spec["params"]

    if dist_type == "exponential":
        mean = p["mean"] if "mean" in p else 1.0 / p["rate"]
        var = mean * mean
    elif dist_type == "uniform":
        a, b = p["min"], p["max"]
        mean = (a + b) / 2.0
        var = ((b - a) ** 2) / 12.0
    elif dist_type == "triangular":
        a, m, b = p["min"], p["mode"], p["max"]
        mean = (a + m + b) / 3.0
        var = (a * a + m * m + b * b - a * m - a * b - m * b) / 18.0
    elif dist_type == "discrete":
        xs, ps = p["values"], p["probabilities"]
        mean = sum(x * q for x, q in zip(xs, ps))
        var = sum(q * (x - mean) ** 2 for x, q in zip(xs, ps))
    elif dist_type == "normal":
        mean = p["mean"]
        var = p["std"] ** 2
    else:
        raise ValueError(f"Unknown dist_type: {dist_type}")

    return mean, var
