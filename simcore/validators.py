from .models import BancoParams, BaseParams, EstacionamientoParams, SerieParams

def require_positive(name: str, value: float) -> None:
    if value is None or value <= 0:
        raise ValueError(f"{name} must be > 0")

def require_non_negative(name: str, value: float) -> None:
    if value is None or value < 0:
        raise ValueError(f"{name} must be >= 0")

def require_int_at_least(name: str, value: int, minimum: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < minimum:
        raise ValueError(f"{name} must be an integer >= {minimum}")

def _check_base(p: BaseParams) -> None:
    require_positive("cierre_hours", p.cierre_hours)
    if p.seed is not None:
        require_int_at_least("seed", p.seed, 0)

def check_serie(p: SerieParams) -> None:
    _check_base(p)
    require_positive("lambda_per_hour", p.lambda_per_hour)
    require_positive("mu1_mean_min", p.mu1_mean_min)
    require_non_negative("s2_min_min", p.s2_min_min)
    require_non_negative("s2_max_min", p.s2_max_min)

def check_banco(p: BancoParams) -> None:
    _check_base(p)
    require_positive("lambda_per_hour", p.lambda_per_hour)
    require_int_at_least("numero_cajeros", p.numero_cajeros, 1)
    require_non_negative("s_min_min", p.s_min_min)
    require_non_negative("s_max_min", p.s_max_min)

def check_estacionamiento(p: EstacionamientoParams) -> None:
    _check_base(p)
    require_positive("lambda_per_hour", p.lambda_per_hour)
    require_int_at_least("capacidad", p.capacidad, 1)
    require_non_negative("s_min_min", p.s_min_min)
    require_non_negative("s_max_min", p.s_max_min)
