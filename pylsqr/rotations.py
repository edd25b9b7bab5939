import numpy as np



def plane_rotation(a, b):
    """Givens rotation (c, s, r) with c*a + s*b = r, -s*a + c*b = 0 and r = hypot(a, b).

    Uses hypot so that r neither overflows nor underflows. If a = b = 0 the
    rotation is the identity, (1, 0, 0).
    """
    r = np.hypot(a, b)
    if r == 0:
        return 1.0, 0.0, 0.0
    return a/r, b/r, r



def damping_rotation(state, damp):
    """Eliminates the damping parameter, altering the diagonal rhobar of the lower-bidiagonal matrix.
    Returns rhobar1.
    """

    cs1, sn1, rhobar1 = plane_rotation(state.rhobar, damp)
    state.psi = sn1*state.phibar
    state.phibar = cs1*state.phibar

    return rhobar1



def subdiagonal_rotation(state, rhobar1):
    """Eliminates the subdiagonal element beta, giving an upper-bidiagonal matrix.
    """

    cs, sn, rho = plane_rotation(rhobar1, state.beta)
    state.rho = rho
    state.theta = sn*state.alfa
    state.rhobar = -cs*state.alfa
    state.phi = cs*state.phibar
    state.phibar = sn*state.phibar
    state.tau = sn*state.phi

    state.x_energy_norm2 += state.phi**2

    return state



def update_solution(state, wantvar=False):
    """Updates x and the search direction w, plus the accumulators ddnorm and var.
    """

    rho = state.rho
    if rho == 0:
        return state

    t1 = state.phi/rho
    t2 = -state.theta/rho
    dk = (1.0/rho)*state.w

    state.x = state.x + t1*state.w
    state.w = state.v + t2*state.w
    state.ddnorm += np.dot(dk, dk)
    if wantvar:
        state.var = state.var + dk*dk

    return state



def xnorm_rotation(state):
    """Rotation on the right eliminating the super-diagonal element theta.
    The result gives the estimate of ||x||.
    """

    delta = state.sn2*state.rho
    gambar = -state.cs2*state.rho
    rhs = state.phi - delta*state.z
    if gambar != 0:
        zbar = rhs/gambar
        state.xnorm = np.hypot(np.sqrt(state.xxnorm), zbar)
    else:
        state.xnorm = np.sqrt(state.xxnorm)

    state.cs2, state.sn2, gamma = plane_rotation(gambar, state.theta)
    state.z = rhs/gamma if gamma != 0 else 0.0
    state.xxnorm += state.z**2

    return state



def rotate_and_update(state, damp, wantvar=False):
    """One pass of the rotation & update engine, in order:
    damping rotation, subdiagonal rotation, x/w update, right rotation for xnorm.
    """

    rhobar1 = damping_rotation(state, damp)
    subdiagonal_rotation(state, rhobar1)
    update_solution(state, wantvar=wantvar)
    xnorm_rotation(state)

    return state
