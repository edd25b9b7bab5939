import numpy as np

from .bidiagonalization import start_bidiag



class LSQRState:
    """Everything LSQR carries from one iteration to the next.

    The bidiagonalization step, the rotation/update engine and the convergence
    evaluator each take the state, update their own part of it in a fixed order,
    and hand it back.

    Vectors:  u, Mu (length m), v, Nv, x, w (length n), var (length n, if wanted).
    Scalars:  alfa, beta, rhobar, phibar, cs2, sn2, z, xxnorm, ddnorm, res2 encode the
              implicit QR factorization of the bidiagonal matrix; the remaining ones are
              the running estimates reported at the end.
    """

    def __init__(self, m, n, window=5, wantvar=False):

        self.m = m
        self.n = n
        self.itn = 0
        self.istop = 0

        # Bidiagonalization
        self.u = np.zeros(m)
        self.Mu = np.zeros(m)
        self.v = np.zeros(n)
        self.Nv = np.zeros(n)
        self.alfa = 0.0
        self.beta = 0.0

        # Solution and search direction
        self.x = np.zeros(n)
        self.w = np.zeros(n)
        self.var = np.zeros(n) if wantvar else None

        # QR recurrence
        self.rhobar = 0.0
        self.phibar = 0.0
        self.rho = 0.0
        self.phi = 0.0
        self.psi = 0.0
        self.tau = 0.0
        self.theta = 0.0
        self.cs2 = -1.0
        self.sn2 = 0.0
        self.z = 0.0

        # Norm accumulators and estimates
        self.bnorm = 0.0
        self.Anorm = 0.0
        self.Acond = 0.0
        self.ddnorm = 0.0
        self.res2 = 0.0
        self.rnorm = 0.0
        self.r1norm = 0.0
        self.r2norm = 0.0
        self.Arnorm = 0.0
        self.xnorm = 0.0
        self.xxnorm = 0.0

        # Stopping ratios of the latest iteration
        self.test1 = 1.0
        self.test2 = 0.0
        self.test3 = np.inf
        self.rtol = 0.0

        # Windowed lower bound on the direct error
        self.window = window
        self.err_vector = np.zeros(window)
        self.x_energy_norm2 = 0.0
        self.err_lbnd = 0.0
        self.err_lbnd_small = False
        self.err_lbnds = []

        # Histories
        self.resvec = []
        self.Aresvec = []



def initialize_state(A, b, M, N, window=5, wantvar=False):
    """Sets up the state and performs the first bidiagonalization step.

    If Arnorm = alfa*beta is zero, x = 0 is already the solution and istop is set to 1.
    If alfa or beta is not finite, istop is set to 9.
    """

    m, n = A.shape
    state = LSQRState(m, n, window=window, wantvar=wantvar)

    u, Mu, v, Nv, alfa, beta = start_bidiag(A, b, M, N)
    state.u, state.Mu, state.v, state.Nv = u, Mu, v, Nv
    state.alfa, state.beta = alfa, beta
    if alfa > 0:
        state.w = v.copy()

    state.rhobar = alfa
    state.phibar = beta
    state.bnorm = beta
    state.rnorm = beta
    state.r1norm = beta
    state.r2norm = beta
    state.Arnorm = alfa*beta
    if beta > 0:
        state.test2 = alfa/beta

    state.resvec.append(state.r2norm)
    state.Aresvec.append(state.Arnorm)

    if not (np.isfinite(alfa) and np.isfinite(beta)):
        state.istop = 9
    elif state.Arnorm == 0:
        state.istop = 1

    return state
