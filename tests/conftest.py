import matplotlib
matplotlib.use("Agg")

import numpy as np
import pytest

from pygamma1d import DoseProfile, low_1998_profiles


@pytest.fixture(scope="session")
def low_pair():
    """(test, reference) pair of the Low et al. experiment."""
    return low_1998_profiles()


@pytest.fixture
def ramp_profile():
    """Five samples, dose rising linearly from 0 to 4."""
    x = np.arange(5, dtype=float)
    return DoseProfile(positions=x, doses=x.copy())


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    import matplotlib.pyplot as plt
    plt.close("all")
