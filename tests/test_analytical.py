import math

import pytest

from simcore.analytical import erlang_b, erlang_c, mg1, mgc, mm1


def test_mm1_closed_form():
    res = mm1(0.5, 1.0)
    assert res.utilization == 0.5
    assert res.Lq == 0.5
    assert res.L == 1.0
    assert res.W == 2.0


def test_unstable_reports_inf():
    res = mm1(2.0, 1.0)
    assert math.isinf(res.Lq)
    assert res.note.startswith("Unstable")


def test_mg1_with_exponential_moments_matches_mm1():
    a = mg1(0.5, 1.0, 1.0)
    b = mm1(0.5, 1.0)
    assert (a.Lq, a.Wq, a.W, a.L) == (b.Lq, b.Wq, b.W, b.L)


def test_erlang_b_small_cases():
    assert erlang_b(1.0, 1) == pytest.approx(0.5)
    # (a^2/2) / (1 + a + a^2/2) with a = 2
    assert erlang_b(2.0, 2) == pytest.approx(0.4)


def test_erlang_c_single_server_is_rho():
    assert erlang_c(0.3, 1.0, 1) == pytest.approx(0.3)


def test_mgc_deterministic_service_halves_mmc_wait():
    exp_service = mgc(1.0, 0.5, 0.25, 3)
    det_service = mgc(1.0, 0.5, 0.0, 3)
    assert det_service.Wq == pytest.approx(exp_service.Wq / 2, abs=1e-4)
