"""
01_low_1998_scenario.py
=======================
Gamma comparison of the Low et al. (1998) synthetic profiles:
- 10 cm field, test profile shifted by 0.25 cm and scaled by 2.5 %
- pass rates for global max, local max, 2 %/2 mm and coarse resampling
- per-sample table (dose difference, DTA, gamma) saved as text
"""

import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

import matplotlib.pyplot as plt
from pygamma1d import GammaComparison, GammaViewer, low_1998_profiles


def main():
    test, reference = low_1998_profiles()

    # 1) Run the four default scenarios
    comparison = GammaComparison(test, reference)
    comparison.report()
    print(comparison.summary().to_string(index=False))

    # 2) Per-sample table (same columns as gamma_1d.txt)
    table = comparison.profile_table()
    table.to_csv("gamma_1d.txt", sep=" ", header=False, index=False)

    # 3) Plot profiles, diagnostics and gamma curves
    GammaViewer(comparison).plot()
    plt.show()


if __name__ == "__main__":
    main()
