from .lsqr import lsqr
from .options import LSQROptions
from .state import LSQRState, initialize_state
from .operators import as_operator, identity_operator
from .bidiagonalization import golub_kahan, bidiag_step
from .rotations import plane_rotation, rotate_and_update
from .convergence import evaluate_convergence, should_print, is_solved, STOP_MESSAGES
from .lcurve import lcurve
from .plotting import plot_convergence, plot_lcurve
