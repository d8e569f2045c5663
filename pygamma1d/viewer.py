from __future__ import annotations

import dataclasses
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.widgets import Slider
from typing import Optional

from .analyzer import compute_gamma
from .scenario import GammaComparison


class GammaViewer:
    """
    Viewer for 1D gamma comparisons.

    - Use plot() for profiles, dose difference/DTA and gamma curves.
    - Use plot_interactive() to vary the dose criterion of one scenario
      with a slider.
    """

    def __init__(self, comparison: GammaComparison):
        self.comparison = comparison
        self.fig: Optional[plt.Figure] = None
        self.ax_gamma: Optional[plt.Axes] = None
        self.slider: Optional[Slider] = None
        self.gamma_line: Optional[plt.Line2D] = None
        self._scenario = None

    # =========================================================
    # Static overview
    # =========================================================
    def plot(self) -> plt.Figure:
        """Three stacked panels: profiles, diagnostics, gamma."""
        cmp = self.comparison
        x = cmp.test.positions
        fig, (ax_prof, ax_diag, ax_gamma) = plt.subplots(3, 1, figsize=(8, 10), sharex=True)

        cmp.reference.plot(ax=ax_prof, color="C0", label="Reference")
        cmp.test.plot(ax=ax_prof, color="C1", linestyle="--", label="Test")
        ax_prof.set_xlabel("")
        ax_prof.set_title("Dose profiles")
        ax_prof.legend(frameon=False)
        ax_prof.grid(True, alpha=0.2)

        ax_diag.plot(x, cmp.dose_difference(), color="C2", label="Dose difference")
        ax_diag.set_ylabel(f"|ΔD| [{cmp.test.dose_units}]")
        ax_dta = ax_diag.twinx()
        ax_dta.plot(x, cmp.distance_to_agreement(), color="C3", alpha=0.6, label="DTA")
        ax_dta.set_ylabel(f"DTA [{cmp.test.position_units}]")
        ax_dta.set_ylim(0, 1.0)
        ax_diag.set_title("Dose difference and DTA")
        ax_diag.grid(True, alpha=0.2)
        fig.legend(loc="upper right", bbox_to_anchor=(1, 1),
                   bbox_transform=ax_diag.transAxes, frameon=False)

        for k, (name, result) in enumerate(cmp.run().items()):
            ax_gamma.plot(x, result.gamma, color=f"C{k}",
                          label=f"{name} ({100.0 * result.pass_rate:.1f} %)")
        ax_gamma.axhline(1.0, color="red", linestyle="--", lw=1.0)
        ax_gamma.set_xlabel(f"Position [{cmp.test.position_units}]")
        ax_gamma.set_ylabel("Gamma")
        ax_gamma.set_ylim(bottom=0)
        ax_gamma.set_title("Gamma index")
        ax_gamma.legend(frameon=False, fontsize=8)
        ax_gamma.grid(True, alpha=0.2)

        plt.tight_layout()
        self.fig = fig
        return fig

    # =========================================================
    # Interactive dose criterion
    # =========================================================
    def plot_interactive(self, *, scenario: Optional[str] = None) -> None:
        """Gamma curve of one scenario with a dose-criterion slider (in %)."""
        scenarios = {s.name: s for s in self.comparison.scenarios}
        name = scenario or self.comparison.scenarios[0].name
        if name not in scenarios:
            raise ValueError(f"Unknown scenario '{name}'. Choose one of {list(scenarios)}.")
        self._scenario = scenarios[name]
        result = self.comparison.run()[name]

        self.fig, self.ax_gamma = plt.subplots(figsize=(8, 5))
        plt.subplots_adjust(bottom=0.25)
        (self.gamma_line,) = self.ax_gamma.plot(result.positions, result.gamma, color="C0")
        self.ax_gamma.axhline(1.0, color="red", linestyle="--", lw=1.0)
        self.ax_gamma.set_xlabel(f"Position [{self.comparison.test.position_units}]")
        self.ax_gamma.set_ylabel("Gamma")
        self.ax_gamma.set_ylim(bottom=0)
        self.ax_gamma.grid(True, alpha=0.2)
        self._set_title(result.pass_rate)

        ax_slider = plt.axes([0.15, 0.08, 0.6, 0.05])
        self.slider = Slider(
            ax_slider, "Dose\ncriterion [%]",
            valmin=0.5, valmax=10.0,
            valinit=100.0 * self._scenario.settings.dose_criterion,
            valstep=0.5)
        self.slider.on_changed(self._update)

        plt.show()

    def _set_title(self, pass_rate: float) -> None:
        self.ax_gamma.set_title(f"{self._scenario.name}: pass rate {100.0 * pass_rate:.1f} %")

    def _update(self, val: float) -> None:
        """Recompute gamma when the slider moves."""
        settings = dataclasses.replace(self._scenario.settings,
                                       dose_criterion=float(self.slider.val) / 100.0)
        result = compute_gamma(self.comparison.test, self.comparison.reference, settings)

        self.gamma_line.set_ydata(result.gamma)
        self._set_title(result.pass_rate)
        finite = result.gamma[np.isfinite(result.gamma)]
        self.ax_gamma.set_ylim(0, max(1.5, float(np.max(finite)) * 1.05) if finite.size else 1.5)
        self.fig.canvas.draw_idle()
