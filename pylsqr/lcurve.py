import numpy as np

from .lsqr import lsqr



def lcurve(A, b, damps=None, **lsqr_kwargs):
    r"""Solves the damped problem for a range of damping parameters and evaluates the L-curve

        ( 0.5*log( || A x_{damp} - b ||_2^2 ), 0.5*log( || x_{damp} ||_2^2 ) ).

    Norms are the solver's own estimates r1norm and xnorm, so no extra products with A are needed.
    lsqr_kwargs are passed on to lsqr (damp may not be one of them).
    """

    assert "damp" not in lsqr_kwargs, "Pass the damping parameters through damps!"

    if damps is None:
        damps = np.logspace(-6, 2, num=50, base=10)
    damps = np.atleast_1d(np.asarray(damps, dtype=float))

    r1norms = np.zeros(len(damps))
    xnorms = np.zeros(len(damps))
    istops = np.zeros(len(damps), dtype=int)
    niters = np.zeros(len(damps), dtype=int)
    xs = []
    for j, damp in enumerate(damps):
        x, flags, stats = lsqr(A, b, damp=damp, **lsqr_kwargs)
        xs.append(x)
        r1norms[j] = abs(stats["r1norm"])
        xnorms[j] = stats["xnorm"]
        istops[j] = stats["istop"]
        niters[j] = flags["niters"]

    with np.errstate(divide="ignore"):
        rho_hat = np.log(r1norms)
        eta_hat = np.log(xnorms)

    data = {
        "damps": damps,
        "x_damps": np.column_stack(xs),
        "r1norms": r1norms,
        "xnorms": xnorms,
        "istops": istops,
        "niters": niters,
        "rho_hat": rho_hat,
        "eta_hat": eta_hat,
    }

    return data
