import numpy as np

from .operators import as_operator, identity_operator, check_operators
from .options import LSQROptions
from .state import initialize_state
from .bidiagonalization import bidiag_step
from .rotations import rotate_and_update
from .convergence import evaluate_convergence, should_print, is_solved, STOP_MESSAGES, EXACT_SOLUTION_MSG
from .trace import print_header, print_columns, print_iteration, print_summary



def lsqr(A, b, damp=0.0, atol=1e-6, btol=1e-6, etol=1e-6, conlim=1e8, itnlim=None, show=False,
         wantvar=False, M=None, N=None, window=5, sqd=False, callback=None):
    r"""
    LSQR for sparse linear equations and least-squares problems.

    Solves ``A x = b``, ``min ||b - A x||_M`` or, if ``damp > 0``::

        min ||b - A x||_M^2 + damp^2 ||x||_{N^{-1}}^2

    where ``||r||_M^2 = r' M r``. A is only accessed through ``A.matvec`` and ``A.rmatvec``.

    If ``sqd`` is True and both ``M`` and ``N`` are given, ``damp`` is set to 1 and the
    iteration solves the symmetric quasi-definite system

        [ M^{-1}   A      ] [ r ]   [ b ]
        [ A'      -N^{-1} ] [ x ] = [ 0 ].

    Parameters
    ----------
    A : {ndarray, sparse matrix, LinearOperator}
        The m-by-n operator.
    b : ndarray, shape (m,)
        Right-hand side.
    damp : float, optional
        Damping parameter (default ``0.0``).
    atol, btol : float, optional
        Stopping tolerances (default ``1e-6``). If both are 1e-9 (say), the final
        residual norm should be accurate to about 9 digits.
    etol : float, optional
        Tolerance on the windowed lower bound of the direct error (default ``1e-6``).
    conlim : float or None, optional
        Stop if the estimate of cond(Abar) exceeds conlim (default ``1e8``).
        ``None`` or ``0`` disables the test.
    itnlim : int, optional
        Iteration limit (default ``2*max(m, n)``).
    show : bool, optional
        Print an iteration log (default ``False``).
    wantvar : bool, optional
        Estimate the diagonal of ``(A'A + damp^2 I)^{-1}`` (default ``False``).
    M, N : {ndarray, sparse matrix, LinearOperator, callable}, optional
        Symmetric positive definite preconditioners of size m and n (default identity).
    window : int, optional
        Number of recent steps in the direct-error lower bound (default ``5``).
    sqd : bool, optional
        Solve the quasi-definite variant (default ``False``).
    callback : callable, optional
        Called as ``callback(state)`` after each iteration. Returning True stops the
        iteration with ``istop = 10`` unless another stopping test fired.

    Returns
    -------
    x : ndarray, shape (n,)
        The final solution.
    flags : dict
        ``solved`` (bool) and ``niters`` (int).
    stats : dict
        ``istop``, ``msg``, ``r1norm``, ``r2norm``, ``Anorm``, ``Acond``, ``Arnorm``,
        ``xnorm``, ``resvec``, ``Aresvec``, ``err_lbnds``, ``x_energy_norm`` and,
        if ``wantvar``, ``var``.

    Notes
    -----
    ``istop`` gives the reason for termination:

    ====  ==========================================================
    1     x is an approximate solution to Ax = b (or x = 0 is exact)
    2     x approximately solves the least-squares problem
    3     the estimate of cond(Abar) has exceeded conlim
    4     Ax - b is small enough for this machine
    5     the least-squares solution is good enough for this machine
    6     cond(Abar) seems to be too large for this machine
    7     the iteration limit has been reached
    8     the truncated direct error is small enough, given etol
    9     a non-finite value was encountered
    10    stopped by the callback
    ====  ==========================================================

    References
    ----------
    .. [1] C. C. Paige and M. A. Saunders (1982a). "LSQR: An algorithm for sparse
           linear equations and sparse least squares", ACM TOMS 8(1), 43-71.
    .. [2] M. Arioli and D. Orban (2013). "Iterative methods for symmetric
           quasi-definite linear systems", Cahier du GERAD G-2013-32.
    """

    options = LSQROptions(damp=damp, atol=atol, btol=btol, etol=etol, conlim=conlim, itnlim=itnlim,
                          show=show, wantvar=wantvar, window=window, sqd=sqd)

    A = as_operator(A)
    m, n = A.shape
    b = np.asarray(b, dtype=float).reshape(-1)
    M_given = M is not None
    N_given = N is not None
    M = as_operator(M, shape=(m, m)) if M_given else identity_operator(m)
    N = as_operator(N, shape=(n, n)) if N_given else identity_operator(n)
    check_operators(A, b, M, N)
    options.resolve(m, n, M_given=M_given, N_given=N_given)

    if options.show:
        print_header(m, n, options)

    state = initialize_state(A, b, M, N, window=options.window, wantvar=options.wantvar)
    msg = EXACT_SOLUTION_MSG if state.istop == 1 else None

    if state.istop == 0:
        if options.show:
            print_columns()
            print_iteration(state)

        # Main iteration loop
        while state.itn < options.itnlim:
            state.itn += 1

            bidiag_step(state, A, M, N, options.damp)
            rotate_and_update(state, options.damp, wantvar=options.wantvar)
            evaluate_convergence(state, options)

            if callback is not None and callback(state) and state.istop == 0:
                state.istop = 10

            if options.show and should_print(state, options):
                print_iteration(state)

            if state.istop != 0:
                break

        # itnlim = 0
        if state.istop == 0:
            state.istop = 7

    if msg is None:
        msg = STOP_MESSAGES[state.istop]

    if options.show:
        print_summary(state, msg=msg)

    flags = {
        "solved": is_solved(state.istop),
        "niters": state.itn,
    }

    stats = {
        "istop": state.istop,
        "msg": msg,
        "r1norm": state.r1norm,
        "r2norm": state.r2norm,
        "Anorm": state.Anorm,
        "Acond": state.Acond,
        "Arnorm": state.Arnorm,
        "xnorm": state.xnorm,
        "resvec": np.asarray(state.resvec),
        "Aresvec": np.asarray(state.Aresvec),
        "err_lbnds": np.asarray(state.err_lbnds),
        "x_energy_norm": np.sqrt(state.x_energy_norm2),
    }
    if options.wantvar:
        stats["var"] = state.var

    return state.x, flags, stats
