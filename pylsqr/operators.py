import numpy as np

from scipy.sparse.linalg import LinearOperator, aslinearoperator



def as_operator(op, shape=None):
    """Wraps op as a SciPy LinearOperator.

    op may be a dense array, a SciPy sparse matrix, a LinearOperator, or a callable
    v -> op(v). Callables need an explicit shape and are taken to be symmetric
    (rmatvec = matvec), which is what the preconditioners M and N are.
    """

    if isinstance(op, LinearOperator):
        return op

    if callable(op) and not hasattr(op, "shape"):
        assert shape is not None, "Must pass shape when the operator is a callable!"
        return LinearOperator(shape, matvec=op, rmatvec=op, dtype=float)

    return aslinearoperator(op)



def identity_operator(n):
    """The n x n identity. Returns its input unchanged.
    """

    _identity = lambda v: v
    return LinearOperator((n, n), matvec=_identity, rmatvec=_identity, dtype=float)



def check_operators(A, b, M, N):
    """Checks that A (m x n), b, M (m x m) and N (n x n) have compatible shapes.
    """

    m, n = A.shape
    assert np.ndim(b) == 1, "b must be a 1D array!"
    assert len(b) == m, "b is incompatible with A!"
    assert M.shape == (m, m), "M must be m x m, with m the number of rows of A!"
    assert N.shape == (n, n), "N must be n x n, with n the number of columns of A!"

    return m, n
