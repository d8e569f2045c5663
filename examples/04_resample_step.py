"""
04_resample_step.py
===================
Effect of the resample step on the pass rate. Steps coarser than the
distance criterion overestimate gamma (a warning is issued).
"""

import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import numpy as np
import matplotlib.pyplot as plt
from pygamma1d import GammaSettings, compute_gamma, low_1998_profiles


def main():
    test, reference = low_1998_profiles()

    steps = np.array([0.001, 0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0])
    rates = [compute_gamma(test, reference, GammaSettings(resample_step=float(h))).pass_rate
             for h in steps]

    _, ax = plt.subplots()
    ax.semilogx(steps, 100.0 * np.asarray(rates), "o-")
    ax.axvline(0.3, color="red", linestyle="--", lw=1.0, label="Distance criterion")
    ax.set_xlabel("Resample step [cm]")
    ax.set_ylabel("Pass rate [%]")
    ax.legend(frameon=False)
    ax.grid(True, alpha=0.2)
    plt.tight_layout()
    plt.show()


if __name__ == "__main__":
    main()
