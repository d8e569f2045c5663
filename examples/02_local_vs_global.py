"""
02_local_vs_global.py
=====================
Global vs local dose normalization for increasingly strict criteria.
Local normalization is stricter in the low-dose tail of the penumbra.
"""

import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import matplotlib.pyplot as plt
from pygamma1d import GammaSettings, compute_gamma, low_1998_profiles


def main():
    test, reference = low_1998_profiles()

    criteria = [(0.03, 0.3), (0.02, 0.2), (0.01, 0.1)]
    fig, axes = plt.subplots(len(criteria), 1, figsize=(7, 8), sharex=True)
    for ax, (dd, dta) in zip(axes, criteria):
        for k, use_global in enumerate((True, False)):
            settings = GammaSettings(use_global_max=use_global, dose_criterion=dd, dist_criterion=dta)
            result = compute_gamma(test, reference, settings)
            ax.plot(result.positions, result.gamma, color=f"C{k}",
                    label=f"{settings.label()}: {100.0 * result.pass_rate:.1f} %")
        ax.axhline(1.0, color="red", linestyle="--", lw=1.0)
        ax.set_ylabel("Gamma")
        ax.legend(frameon=False, fontsize=8)
        ax.grid(True, alpha=0.2)
    axes[-1].set_xlabel("Position [cm]")
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
