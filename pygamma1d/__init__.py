"""
pygamma1d
=========

One-dimensional gamma index evaluation of dose profiles (clean public API).
"""

from .core import (DoseProfile, ResampledProfile, GammaSettings, GammaResult,
                   GammaError, InvalidConfiguration, ProfileMismatch, DegenerateProfile,
                   GAMMA_3_03_GLOBAL, GAMMA_2_02_GLOBAL)
from .profiles import (PenumbraModel, LOW_1998_PENUMBRA, generate_profile,
                       generate_profile_pair, low_1998_profiles)
from .analyzer import (resample, dose_difference, distance_to_agreement, compute_gamma,
                       NO_MATCH_DISTANCE)
from .scenario import Scenario, GammaComparison, default_scenarios
from .viewer import GammaViewer

__all__ = [
    "DoseProfile", "ResampledProfile", "GammaSettings", "GammaResult",
    "GammaError", "InvalidConfiguration", "ProfileMismatch", "DegenerateProfile",
    "GAMMA_3_03_GLOBAL", "GAMMA_2_02_GLOBAL",
    "PenumbraModel", "LOW_1998_PENUMBRA", "generate_profile", "generate_profile_pair",
    "low_1998_profiles",
    "resample", "dose_difference", "distance_to_agreement", "compute_gamma",
    "NO_MATCH_DISTANCE",
    "Scenario", "GammaComparison", "default_scenarios",
    "GammaViewer",
]
