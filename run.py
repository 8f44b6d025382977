# run.py

import logging

from simcore.models import SerieParams, BancoParams, EstacionamientoParams
from simcore.serie import run_serie
from simcore.banco import run_banco
from simcore.estacionamiento import run_estacionamiento
from simapi.schemas import BancoRequest
from simapi.service import sweep

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


def show(res, n_rows=5):
    print(" | ".join(res.columns))
    for r in res.rows[:n_rows]:
        print(r)
    for name, value in res.metrics.items():
        print(f"  {name}: {value}")
    for ref in res.reference:
        print("  reference:", ref)


# =====================================================
# 1️⃣ Serie (2 stations in tandem)
# =====================================================
print("=== Serie ===")
show(run_serie(SerieParams(
    cierre_hours=8,
    seed=20250915,
    lambda_per_hour=20,
    mu1_mean_min=2,
    s2_min_min=1,
    s2_max_min=3,
)))

# =====================================================
# 2️⃣ Banco (N tellers)
# =====================================================
print("\n=== Banco ===")
show(run_banco(BancoParams(
    cierre_hours=8,
    seed=42,
    lambda_per_hour=40,
    numero_cajeros=3,
    s_min_min=0,
    s_max_min=1,
)))

# =====================================================
# 3️⃣ Estacionamiento (C slots, losses)
# =====================================================
print("\n=== Estacionamiento ===")
show(run_estacionamiento(EstacionamientoParams(
    cierre_hours=8,
    seed=7,
    lambda_per_hour=10,
    capacidad=6,
    s_min_min=10,
    s_max_min=30,
)))

# =====================================================
# 4️⃣ Sweep: tellers 1..4, same seed each run
# =====================================================
print("\n=== Banco sweep ===")
for n, res in zip(range(1, 5), sweep(BancoRequest(seed=42, lambda_per_hour=90), "numero_cajeros", range(1, 5))):
    print(f"  N={n}: Lq={res.metrics['Lq']:.4f} W_prom_h={res.metrics['W_prom_h']:.4f}")
