import numpy as np



EXACT_SOLUTION_MSG = "The exact solution is x = 0"

STOP_MESSAGES = {
    0: "The iteration has not stopped",
    1: "Ax - b is small enough, given atol, btol",
    2: "The least-squares solution is good enough, given atol",
    3: "The estimate of cond(Abar) has exceeded conlim",
    4: "Ax - b is small enough for this machine",
    5: "The least-squares solution is good enough for this machine",
    6: "Cond(Abar) seems to be too large for this machine",
    7: "The iteration limit has been reached",
    8: "The truncated direct error is small enough, given etol",
    9: "A non-finite value was encountered",
    10: "Stopped by callback",
}

# Codes for which x is a usable solution
SOLVED_CODES = (1, 2, 3, 5, 6, 8)



def is_solved(istop):
    """True if the termination code means x is a usable solution.
    """
    return istop in SOLVED_CODES



def update_error_bound(state, etol):
    """Stores phi in the sliding window and, once the window is full, forms the
    lower bound on the direct error ||x_exact - x_k|| in the energy norm.
    """

    state.err_vector[state.itn % state.window] = state.phi
    if state.itn >= state.window:
        state.err_lbnd = np.linalg.norm(state.err_vector)
        state.err_lbnds.append(state.err_lbnd)
        state.err_lbnd_small = state.err_lbnd <= etol*np.sqrt(state.x_energy_norm2)

    return state



def update_norms(state, dampsq):
    """Estimates cond(Abar), ||rbar||, ||Abar'rbar|| and the undamped residual norm r1norm.
    """

    state.Acond = state.Anorm*np.sqrt(state.ddnorm)
    state.res2 += state.psi**2
    state.rnorm = np.hypot(state.phibar, np.sqrt(state.res2))
    state.Arnorm = state.alfa*abs(state.tau)

    # r1norm = sqrt(r2norm^2 - damp^2 ||x||^2), which may suffer cancellation.
    if dampsq == 0:
        state.r1norm = state.rnorm
    else:
        r1sq = state.rnorm**2 - dampsq*state.xxnorm
        state.r1norm = np.sqrt(abs(r1sq))
        if r1sq < 0:
            state.r1norm = -state.r1norm
    state.r2norm = state.rnorm

    state.resvec.append(state.r2norm)
    state.Aresvec.append(state.Arnorm)

    return state



def _has_nonfinite(state):
    scalars = [state.alfa, state.beta, state.rho, state.phi, state.rnorm, state.Arnorm, state.xnorm, state.Anorm]
    # Acond, ddnorm and xxnorm may legitimately reach inf (code 6), but never nan
    accumulated = [state.Acond, state.ddnorm, state.xxnorm]
    return not np.all(np.isfinite(scalars)) or np.any(np.isnan(accumulated))



def evaluate_convergence(state, options):
    """Computes the stopping ratios and sets state.istop.

    The tests run in a fixed order and a later test that fires overwrites the code
    set by an earlier one: 7, 8, 6, 5, 4, then the user tolerances 3, 2, 1.
    A non-finite estimate overrides everything with code 9.
    """

    update_error_bound(state, options.etol)
    update_norms(state, options.dampsq)

    Anorm = state.Anorm
    rnorm = state.rnorm
    bnorm = state.bnorm
    atol = options.atol
    ctol = options.ctol

    state.test1 = rnorm/bnorm if bnorm > 0 else 0.0
    state.test2 = state.Arnorm/(Anorm*rnorm) if Anorm*rnorm != 0 else 0.0
    state.test3 = 1.0/state.Acond if state.Acond != 0 else np.inf
    ratio = Anorm*state.xnorm/bnorm if bnorm > 0 else 0.0
    t1 = state.test1/(1.0 + ratio)
    state.rtol = options.btol + atol*ratio

    istop = 0
    if state.itn >= options.itnlim:
        istop = 7
    if state.err_lbnd_small:
        istop = 8
    # Equivalent to the tests below with atol = btol = eps and conlim = 1/eps.
    if 1.0 + state.test3 <= 1.0:
        istop = 6
    if 1.0 + state.test2 <= 1.0:
        istop = 5
    if 1.0 + t1 <= 1.0:
        istop = 4

    if ctol is not None and state.test3 <= ctol:
        istop = 3
    if state.test2 <= atol:
        istop = 2
    if state.test1 <= state.rtol:
        istop = 1

    if _has_nonfinite(state):
        istop = 9

    state.istop = istop

    return state



def should_print(state, options):
    """Whether this iteration gets a line in the trace.
    """

    ctol = options.ctol
    itn = state.itn
    return (
        state.n <= 40
        or itn <= 10
        or itn >= options.itnlim - 10
        or itn % 10 == 0
        or (ctol is not None and state.test3 <= 2*ctol)
        or state.test2 <= 10*options.atol
        or state.test1 <= 10*state.rtol
        or state.istop != 0
    )
