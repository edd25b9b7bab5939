import numpy as np

from pylsqr import LSQROptions, LSQRState, evaluate_convergence, should_print



def make_state(n=3, **kwargs):
    """A state in which no stopping test fires: test1 = 1, test2 = 0.5, test3 = 1,
    and a full error window would hold err_lbnd = 1 against ||x||_E = 1.
    """
    state = LSQRState(n, n, window=5)
    state.itn = 1
    state.bnorm = 1.0
    state.Anorm = 1.0
    state.ddnorm = 1.0
    state.phibar = 1.0
    state.alfa = 1.0
    state.tau = 0.5
    state.phi = 1.0
    state.x_energy_norm2 = 1.0
    for key, val in kwargs.items():
        setattr(state, key, val)
    return state



def test_no_test_fires():
    state = evaluate_convergence(make_state(), LSQROptions(itnlim=100))

    assert state.istop == 0
    assert np.isclose(state.test1, 1.0)
    assert np.isclose(state.test2, 0.5)
    assert np.isclose(state.test3, 1.0)
    assert np.isclose(state.Arnorm, 0.5)



def test_compatible_test_has_highest_priority():
    # rnorm = 0 fires 1, 2, 4 and 5, and itn = itnlim fires 7
    state = make_state(phibar=0.0, itn=100)
    evaluate_convergence(state, LSQROptions(itnlim=100))

    assert state.test1 == 0.0
    assert state.test2 == 0.0
    assert state.istop == 1



def test_least_squares_test_overrides_condition_test():
    # Arnorm = 0 fires 2 and 5, cond(A) = 1e10 fires 3
    state = make_state(alfa=0.0, ddnorm=1e20)
    evaluate_convergence(state, LSQROptions(itnlim=100))

    assert state.istop == 2



def test_condition_test():
    options = LSQROptions(itnlim=100, conlim=1e8)
    state = evaluate_convergence(make_state(ddnorm=1e20), options)
    assert state.istop == 3
    assert np.isclose(state.Acond, 1e10)

    for conlim in [None, 0]:
        state = evaluate_convergence(make_state(ddnorm=1e20), LSQROptions(itnlim=100, conlim=conlim))
        assert state.istop == 0



def test_machine_precision_condition():
    state = evaluate_convergence(make_state(ddnorm=1e40), LSQROptions(itnlim=100, conlim=None))
    assert state.istop == 6

    # The user tolerance overrides the machine test
    state = evaluate_convergence(make_state(ddnorm=1e40), LSQROptions(itnlim=100, conlim=1e8))
    assert state.istop == 3



def test_zero_condition_estimate_is_not_ill_conditioned():
    state = evaluate_convergence(make_state(ddnorm=0.0), LSQROptions(itnlim=100))
    assert state.test3 == np.inf
    assert state.istop == 0



def test_error_bound_test():
    state = make_state(itn=2, window=2, err_vector=np.zeros(2), phi=1e-10, x_energy_norm2=1.0)
    evaluate_convergence(state, LSQROptions(itnlim=100, etol=1e-6))

    assert state.err_vector[0] == 1e-10
    assert len(state.err_lbnds) == 1
    assert np.isclose(state.err_lbnd, 1e-10)
    assert state.istop == 8



def test_error_bound_waits_for_full_window():
    state = make_state(itn=4, phi=1e-10, x_energy_norm2=1.0)
    evaluate_convergence(state, LSQROptions(itnlim=100))

    assert state.err_vector[4] == 1e-10
    assert len(state.err_lbnds) == 0
    assert state.istop == 0



def test_iteration_limit_test():
    state = evaluate_convergence(make_state(itn=100), LSQROptions(itnlim=100))
    assert state.istop == 7
    assert not state.err_lbnd_small



def test_nonfinite_overrides_everything():
    state = evaluate_convergence(make_state(Anorm=np.nan, phibar=0.0), LSQROptions(itnlim=100))
    assert state.istop == 9

    state = evaluate_convergence(make_state(rho=np.inf), LSQROptions(itnlim=100))
    assert state.istop == 9

    state = evaluate_convergence(make_state(ddnorm=np.nan), LSQROptions(itnlim=100))
    assert state.istop == 9

    # An infinite condition estimate is the machine-precision test, not a failure
    state = evaluate_convergence(make_state(ddnorm=np.inf), LSQROptions(itnlim=100, conlim=None))
    assert state.istop == 6



def test_r1norm_sign_reports_cancellation():
    options = LSQROptions(itnlim=100, damp=1.0)

    state = evaluate_convergence(make_state(xxnorm=0.75), options)
    assert np.isclose(state.r1norm, 0.5)
    assert np.isclose(state.r2norm, 1.0)

    state = evaluate_convergence(make_state(xxnorm=4.0), options)
    assert np.isclose(state.r1norm, -np.sqrt(3.0))



def test_histories_grow_by_one():
    state = make_state()
    state.resvec.append(2.0)
    state.Aresvec.append(1.0)
    evaluate_convergence(state, LSQROptions(itnlim=100))

    assert state.resvec == [2.0, 1.0]
    assert state.Aresvec == [1.0, 0.5]



def test_should_print():
    options = LSQROptions(itnlim=100, atol=1e-6)

    def printed(**kwargs):
        kwargs.setdefault("itn", 15)
        state = make_state(n=100, **kwargs)
        evaluate_convergence(state, options)
        return should_print(state, options)

    assert not printed()
    assert printed(itn=5)
    assert printed(itn=20)
    assert printed(itn=30)                    # itn mod 10 == 0
    assert printed(itn=95)
    assert printed(tau=5e-6)                  # test2 <= 10*atol
    assert printed(ddnorm=3.6e15)             # test3 <= 2*ctol
    assert printed(phibar=5e-6)               # test1 <= 10*rtol
    assert printed(itn=100)                   # istop != 0

    small = make_state(n=10, itn=15)
    evaluate_convergence(small, options)
    assert should_print(small, options)
