import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from pylsqr import lcurve, lsqr, plot_convergence, plot_lcurve



def make_problem(seed=40):
    rng = np.random.default_rng(seed)
    A = rng.standard_normal((40, 20))
    xtrue = rng.standard_normal(20)
    b = A @ xtrue + 0.1*rng.standard_normal(40)
    return A, b



def test_lcurve_is_monotone_in_damping():
    A, b = make_problem()
    damps = np.logspace(-3, 1, 8)

    data = lcurve(A, b, damps, atol=1e-10, btol=1e-10, etol=0.0)

    assert data["x_damps"].shape == (20, 8)
    assert np.all(data["istops"] > 0)
    # more damping: smaller solution, larger residual
    assert np.all(np.diff(data["xnorms"]) <= 1e-8)
    assert np.all(np.diff(data["r1norms"]) >= -1e-8)
    assert np.allclose(data["rho_hat"], np.log(data["r1norms"]))
    assert np.allclose(data["eta_hat"], np.log(data["xnorms"]))



def test_lcurve_matches_individual_solves():
    A, b = make_problem()
    damps = [0.01, 1.0]

    data = lcurve(A, b, damps)

    for j, damp in enumerate(damps):
        x, flags, stats = lsqr(A, b, damp=damp)
        assert np.array_equal(data["x_damps"][:, j], x)
        assert data["niters"][j] == flags["niters"]



def test_lcurve_rejects_damp_keyword():
    A, b = make_problem()
    with pytest.raises(AssertionError):
        lcurve(A, b, [0.1], damp=0.1)



def test_plots_are_saved(tmp_path):
    A, b = make_problem()

    x, flags, stats = lsqr(A, b, atol=1e-10, btol=1e-10)
    plot_convergence(stats, plot_path=tmp_path / "convergence.png")
    assert (tmp_path / "convergence.png").exists()

    data = lcurve(A, b, np.logspace(-2, 1, 5))
    plot_lcurve(data, plot_path=tmp_path / "lcurve.png")
    assert (tmp_path / "lcurve.png").exists()
