import matplotlib.pyplot as plt
import numpy as np



def plot_convergence(stats, plot_path=None):
    """Plots the histories of r2norm, Arnorm and the direct-error lower bound returned by lsqr.
    """

    resvec = stats["resvec"]
    Aresvec = stats["Aresvec"]
    err_lbnds = stats["err_lbnds"]
    itns = np.arange(len(resvec))

    fig, axs = plt.subplots(figsize=(8,5))
    axs.semilogy(itns, resvec, label="$\\|\\bar{r}_k\\|$ (r2norm)", color="blue")
    axs.semilogy(itns, Aresvec, label="$\\|\\bar{A}^T \\bar{r}_k\\|$ (Arnorm)", color="orange")
    if len(err_lbnds) > 0:
        # the first bound is available once the window is full
        err_itns = np.arange(len(resvec) - len(err_lbnds), len(resvec))
        axs.semilogy(err_itns, err_lbnds, label="direct error lower bound", color="green", ls="--")

    axs.set_xlabel("iteration $k$")
    axs.set_title(f"LSQR convergence (istop = {stats['istop']})")
    axs.legend()
    axs.grid()

    fig.tight_layout()

    if plot_path is not None:
        fig.savefig(plot_path, dpi=250)
        plt.close()
        return None
    else:
        plt.show()
        return None



def plot_lcurve(lcurve_data, plot_path=None):
    """Generates a plot of the L-curve of the damped problem, colored by damping parameter.
    """

    fig, axs = plt.subplots(figsize=(8,5))
    axs.plot(lcurve_data["rho_hat"], lcurve_data["eta_hat"], color="blue", zorder=-10)
    sc = axs.scatter(lcurve_data["rho_hat"], lcurve_data["eta_hat"], c=np.log10(lcurve_data["damps"]), cmap="viridis", s=20)
    fig.colorbar(sc, ax=axs, label="$\\log_{10}$ damp")

    axs.set_xlabel("$\\log \\| A x - b \\|_2$")
    axs.set_ylabel("$\\log \\| x \\|_2$")
    axs.set_title("L-curve")
    axs.grid()

    fig.tight_layout()

    if plot_path is not None:
        fig.savefig(plot_path, dpi=250)
        plt.close()
        return None
    else:
        plt.show()
        return None
