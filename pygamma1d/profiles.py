from __future__ import annotations

import numpy as np
from dataclasses import dataclass
from typing import Tuple
from scipy.special import erf

from .core import DoseProfile

"""
    Synthetic dose profiles built from the two-term error-function penumbra
    model of Low et al. (Med Phys 1998;25(5):656-661):

        D(x) = t + (1 - t) * [a * Phi(b1 * (x0 - |x|)) + (1 - a) * Phi(b2 * (x0 - |x|))]

    with Phi(u) = (erf(u) + 1) / 2.
"""


@dataclass(frozen=True)
class PenumbraModel:
    """Shape parameters of the two-term error-function penumbra."""
    a: float
    b1: float
    b2: float
    t: float

    def dose(self, x: np.ndarray, x0: float) -> np.ndarray:
        """Relative dose at positions x for a field of half-width x0."""
        r = x0 - np.abs(x)
        phi1 = (erf(self.b1 * r) + 1.0) / 2.0
        phi2 = (erf(self.b2 * r) + 1.0) / 2.0
        return self.t + (1.0 - self.t) * (self.a * phi1 + (1.0 - self.a) * phi2)


# Fit parameters from Low et al. (1998)
LOW_1998_PENUMBRA = PenumbraModel(a=0.173, b1=0.456, b2=2.892, t=0.01)


def profile_axis(*, width: float, sample_count: int) -> np.ndarray:
    """
    Evenly spaced positions centred at zero.

    x_n = -width/2 + width * n / N for n = 0..N-1, so the upper end
    (+width/2) is not included.
    """
    if sample_count < 1:
        raise ValueError("sample_count must be at least 1.")
    if not np.isfinite(width) or width <= 0:
        raise ValueError("width must be a positive finite value.")
    n = np.arange(sample_count, dtype=float)
    return -width / 2.0 + width * (n / float(sample_count))


def generate_profile(x0: float,
                     shift: float = 0.0,
                     eta: float = 1.0,
                     shape: PenumbraModel = LOW_1998_PENUMBRA,
                     width: float = 20.0,
                     sample_count: int = 256,
                     *,
                     position_units: str = "cm") -> DoseProfile:
    """
    Build a synthetic penumbra profile.

    Parameters
    ----------
    x0 : float
        Field half-width.
    shift : float, default=0.0
        Lateral shift added to the half-width (x0 -> x0 + shift).
    eta : float, default=1.0
        Scaling factor applied to the whole profile.
    shape : PenumbraModel
        Error-function shape parameters.
    width : float, default=20.0
        Total width of the sampled domain, centred at zero.
    sample_count : int, default=256
        Number of samples.
    """
    x = profile_axis(width=width, sample_count=sample_count)
    dose = eta * shape.dose(x, x0 + shift)
    return DoseProfile(positions=x, doses=dose, position_units=position_units)


def generate_profile_pair(x0: float,
                          shift: float,
                          eta: float,
                          shape: PenumbraModel = LOW_1998_PENUMBRA,
                          width: float = 20.0,
                          sample_count: int = 256) -> Tuple[DoseProfile, DoseProfile]:
    """Return (test, reference); the reference is unshifted and unscaled."""
    test = generate_profile(x0, shift, eta, shape, width, sample_count)
    reference = generate_profile(x0, 0.0, 1.0, shape, width, sample_count)
    return test, reference


def low_1998_profiles() -> Tuple[DoseProfile, DoseProfile]:
    """
    Test/reference pair of the Low et al. experiment: 10 cm field,
    0.25 cm shift and 2.5 % scaling, 256 samples over 20 cm.
    """
    return generate_profile_pair(x0=5.0, shift=0.25, eta=1.025,
                                 shape=LOW_1998_PENUMBRA,
                                 width=20.0, sample_count=256)
