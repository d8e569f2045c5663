import numpy as np
import pytest

from pygamma1d import GammaComparison, GammaSettings, GammaViewer, Scenario


@pytest.fixture
def viewer(low_pair):
    test, ref = low_pair
    scenarios = [Scenario("Initial", GammaSettings()),
                 Scenario("Local Max.", GammaSettings(use_global_max=False))]
    return GammaViewer(GammaComparison(test, ref, scenarios))


class TestGammaViewer:

    def test_plot_draws_three_panels(self, viewer):
        fig = viewer.plot()
        # profiles, diagnostics (+ twin DTA axis), gamma
        assert len(fig.axes) == 4
        gamma_ax = fig.axes[2]
        assert gamma_ax.get_ylabel() == "Gamma"
        assert len(gamma_ax.get_lines()) == 3

    def test_slider_recomputes_gamma(self, viewer):
        viewer.plot_interactive(scenario="Initial")
        before = np.array(viewer.gamma_line.get_ydata(), dtype=float)

        viewer.slider.set_val(1.0)

        after = np.array(viewer.gamma_line.get_ydata(), dtype=float)
        evaluated = ~np.isnan(before)
        assert np.all(after[evaluated] >= before[evaluated])
        assert "pass rate" in viewer.ax_gamma.get_title()

    def test_unknown_scenario(self, viewer):
        with pytest.raises(ValueError):
            viewer.plot_interactive(scenario="nope")
