from .convergence import STOP_MESSAGES



def print_header(m, n, options):
    """Prints the problem size and the tolerances.
    """
    conlim = options.conlim if options.conlim is not None else 0.0
    print(" ")
    print("LSQR            Least-squares solution of  Ax = b")
    print(f"The matrix A has {m:8d} rows  and {n:8d} cols")
    print(f"damp = {options.damp:20.14e}    wantvar = {options.wantvar!s:>8}")
    print(f"atol = {options.atol:8.2e}                 conlim = {conlim:8.2e}")
    print(f"btol = {options.btol:8.2e}                 itnlim = {options.itnlim:8d}")
    print(f"etol = {options.etol:8.2e}                 window = {options.window:8d}")



def print_columns():
    print(" ")
    print("   Itn      x[0]       r1norm     r2norm  Compatible   LS      Norm A   Cond A")



def print_iteration(state):
    """One row of the iteration table. Anorm and Acond are left out at iteration 0.
    """
    row = f"{state.itn:6d} {state.x[0]:12.5e} {state.r1norm:10.3e} {state.r2norm:10.3e}  {state.test1:8.1e} {state.test2:8.1e}"
    if state.itn > 0:
        row += f" {state.Anorm:8.1e} {state.Acond:8.1e}"
    print(row)



def print_summary(state, msg=None):
    """Prints the stopping condition and the final estimates.
    """
    if msg is None:
        msg = STOP_MESSAGES[state.istop]
    print(" ")
    print("LSQR finished")
    print(msg)
    print(" ")
    print(f"istop ={state.istop:8d}   r1norm ={state.r1norm:8.1e}   Anorm ={state.Anorm:8.1e}   Arnorm ={state.Arnorm:8.1e}")
    print(f"itn   ={state.itn:8d}   r2norm ={state.r2norm:8.1e}   Acond ={state.Acond:8.1e}   xnorm  ={state.xnorm:8.1e}")
    print(" ")
