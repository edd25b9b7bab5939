class LSQROptions:
    """Options for lsqr.

    damp: damping parameter, minimizes ||Ax - b||^2 + damp^2 ||x||^2.
    atol, btol: stopping tolerances on the least-squares and compatible residuals.
    etol: tolerance on the windowed lower bound of the direct error.
    conlim: limit on the estimate of cond(Abar). None (or 0) disables the test.
    itnlim: iteration limit. None means 2*max(m, n).
    show: print an iteration log.
    wantvar: estimate the diagonal of (A'A + damp^2 I)^{-1}.
    window: number of recent phi values used for the error lower bound.
    sqd: if True and both M and N are given, solve the quasi-definite system (damp = 1).
    """

    def __init__(self, damp=0.0, atol=1e-6, btol=1e-6, etol=1e-6, conlim=1e8, itnlim=None,
                 show=False, wantvar=False, window=5, sqd=False):

        for name, val in [("damp", damp), ("atol", atol), ("btol", btol), ("etol", etol)]:
            if val < 0:
                raise ValueError(f"{name} must be nonnegative.")
        if conlim is not None and conlim < 0:
            raise ValueError("conlim must be nonnegative (or None to disable the condition test).")
        if itnlim is not None and itnlim < 0:
            raise ValueError("itnlim must be a nonnegative integer.")
        if window < 1:
            raise ValueError("window must be a positive integer.")

        self.damp = float(damp)
        self.atol = atol
        self.btol = btol
        self.etol = etol
        self.conlim = conlim
        self.itnlim = itnlim
        self.show = show
        self.wantvar = wantvar
        self.window = int(window)
        self.sqd = sqd



    @property
    def ctol(self):
        """Tolerance on 1/cond(Abar), or None when the condition test is disabled.
        """
        if self.conlim is None or self.conlim == 0:
            return None
        return 1.0/self.conlim



    @property
    def dampsq(self):
        return self.damp**2



    def resolve(self, m, n, M_given=False, N_given=False):
        """Fills in the defaults that depend on the problem (itnlim, sqd damping).
        Returns self.
        """

        if self.itnlim is None:
            self.itnlim = 2*max(m, n)
        self.itnlim = int(self.itnlim)

        if self.sqd and M_given and N_given:
            self.damp = 1.0

        return self
