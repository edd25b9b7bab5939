import numpy as np

from .operators import as_operator, identity_operator



def _preconditioned_norm(x, Px):
    """sqrt(<x, Px>), with small negative values from cancellation clamped to 0.

    Both vectors are scaled by their largest entry before the inner product,
    so the result neither overflows nor underflows when it is representable.
    """
    sx = np.max(np.abs(x))
    sp = np.max(np.abs(Px))
    if sx == 0 or sp == 0:
        return 0.0
    xPx = float(np.dot(x/sx, Px/sp))
    return np.sqrt(sx)*np.sqrt(sp)*np.sqrt(max(xPx, 0.0))




def _next_u(A, M, v, Mu, alfa):
    """beta*M^{-1}u = A v - alfa*M^{-1}u. Returns the new u, M^{-1}u and beta.
    """
    Mu = A.matvec(v) - alfa*Mu
    u = M.matvec(Mu)
    beta = _preconditioned_norm(u, Mu)
    if beta > 0:
        u = (1.0/beta)*u
        Mu = (1.0/beta)*Mu
    return u, Mu, beta



def _next_v(A, N, u, Nv, beta):
    """alfa*N^{-1}v = A'u - beta*N^{-1}v. Returns the new v, N^{-1}v and alfa.
    """
    Nv = A.rmatvec(u) - beta*Nv
    v = N.matvec(Nv)
    alfa = _preconditioned_norm(v, Nv)
    if alfa > 0:
        v = (1.0/alfa)*v
        Nv = (1.0/alfa)*Nv
    return v, Nv, alfa



def start_bidiag(A, b, M, N):
    """First step of the bidiagonalization: beta*u = M b and alfa*v = N A'u.

    Returns u, Mu, v, Nv, alfa, beta, where Mu = M^{-1}u and Nv = N^{-1}v.
    If beta = 0 the v-vectors are zero and alfa = 0.
    """

    n = A.shape[1]
    Nv = np.zeros(n)
    v = np.zeros(n)
    alfa = 0.0

    Mu = np.array(b, dtype=float)
    u = M.matvec(Mu)
    beta = _preconditioned_norm(u, Mu)
    if beta > 0:
        u = (1.0/beta)*u
        Mu = (1.0/beta)*Mu
        v, Nv, alfa = _next_v(A, N, u, Nv, 0.0)

    return u, Mu, v, Nv, alfa, beta



def bidiag_step(state, A, M, N, damp):
    """Advances the Golub-Kahan recurrence held in state by one step.

    Overwrites u, Mu, beta and, if beta > 0, the Frobenius-norm estimate Anorm
    and v, Nv, alfa. When beta = 0 the Krylov space is exhausted and alfa is left as is.
    """

    state.u, state.Mu, state.beta = _next_u(A, M, state.v, state.Mu, state.alfa)

    if state.beta > 0:
        # ||(Anorm, alfa, beta, damp)||_2 without overflow
        state.Anorm = np.hypot(np.hypot(state.Anorm, state.alfa), np.hypot(state.beta, damp))
        state.v, state.Nv, state.alfa = _next_v(A, N, state.u, state.Nv, state.beta)

    return state



def golub_kahan(A, b, k, M=None, N=None, tol=0.0):
    """
    Preconditioned Golub–Kahan bidiagonalization of a linear operator A (m×n) started from b ∈ R^m.

    Parameters
    ----------
    A : array, sparse matrix or scipy.sparse.linalg.LinearOperator
        Must support A.matvec(x) and A.rmatvec(y).
    b : ndarray, shape (m,)
        Nonzero starting vector; beta_1 u_1 = M b.
    k : int
        Number of steps to attempt.
    M, N : optional
        Symmetric positive definite operators (default identity). The u_j are
        orthonormal in the M^{-1} inner product and the v_j in the N^{-1} inner product.
    tol : float, default 0.0
        Treat alfa, beta ≤ tol as breakdown.

    Returns
    -------
    U : ndarray, shape (m, ell+1)
    V : ndarray, shape (n, ell)
    B : ndarray, shape (ell+1, ell)
        Lower bidiagonal, with A V = M^{-1} U B.
    alphas : ndarray, shape (ell,)
    betas  : ndarray, shape (ell,)
    u0_norm : float
        beta_1 = sqrt(b' M b).
    """

    A = as_operator(A)
    m, n = A.shape
    M = identity_operator(m) if M is None else as_operator(M, shape=(m, m))
    N = identity_operator(n) if N is None else as_operator(N, shape=(n, n))

    b = np.asarray(b, dtype=float).reshape(-1)
    if b.size != m:
        raise ValueError("b has incompatible length with A.")

    Mu = b.copy()
    u = M.matvec(Mu)
    u0_norm = _preconditioned_norm(u, Mu)
    if u0_norm == 0:
        raise ValueError("b must be nonzero.")
    u = u / u0_norm
    Mu = Mu / u0_norm

    # Allocate
    U = np.zeros((m, k + 1))
    V = np.zeros((n, k))
    alphas = np.zeros(k)
    betas = np.zeros(k)
    U[:, 0] = u

    Nv = np.zeros(n)
    beta = 0.0
    ell = 0
    for j in range(k):
        v, Nv, alfa = _next_v(A, N, u, Nv, beta)
        alphas[j] = alfa
        if alfa <= tol:
            ell = j
            break
        V[:, j] = v

        u, Mu, beta = _next_u(A, M, v, Mu, alfa)
        betas[j] = beta
        if beta <= tol:
            ell = j + 1
            break

        U[:, j + 1] = u
        ell = j + 1

    # Trim and build B
    U = U[:, :ell + 1]
    V = V[:, :ell]
    alphas = alphas[:ell]
    betas = betas[:ell]

    B = np.zeros((ell + 1, ell))
    for j in range(ell):
        B[j, j] = alphas[j]
        B[j + 1, j] = betas[j]

    return U, V, B, alphas, betas, u0_norm
