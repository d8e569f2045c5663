"""
03_interactive_viewer.py
========================
Interactive viewer example:
- Gamma curve of the "Initial" scenario (3 %, 0.3 cm, global max)
- Bottom slider: adjust dose criterion [%]
"""

import os, sys
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from pygamma1d import GammaComparison, GammaViewer, low_1998_profiles


def main():
    test, reference = low_1998_profiles()
    viewer = GammaViewer(GammaComparison(test, reference))
    viewer.plot_interactive(scenario="Initial")


if __name__ == "__main__":
    main()
