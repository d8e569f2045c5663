from __future__ import annotations

import numpy as np
import matplotlib.pyplot as plt
from dataclasses import dataclass, asdict
from typing import Tuple, Optional, Dict, Any


class GammaError(ValueError):
    """Base class for gamma evaluation errors."""


class InvalidConfiguration(GammaError):
    """Non-positive criterion, threshold, resample step or match tolerance."""


class ProfileMismatch(GammaError):
    """Test and reference profiles cannot be aligned point by point."""


class DegenerateProfile(GammaError):
    """Profile has too few samples for the requested operation."""


class DoseProfile:
    """
    One-dimensional dose distribution.

    Stores paired positions and doses. The i-th position is associated with
    the i-th dose value; positions are strictly increasing. Both arrays are
    copied and frozen at construction, so a profile never changes after it
    has been built.
    """

    def __init__(self, *,
                 positions: np.ndarray,
                 doses: np.ndarray,
                 position_units: str = "cm",
                 dose_units: str = "a.u."):
        positions = self._validate_array(positions, "positions")
        doses = self._validate_array(doses, "doses")

        if positions.shape != doses.shape:
            raise ProfileMismatch("Positions and doses arrays must have the same shape.")
        if positions.size > 1 and np.any(np.diff(positions) <= 0):
            raise ValueError("Positions must be strictly increasing.")

        positions.flags.writeable = False
        doses.flags.writeable = False
        self.positions = positions
        self.doses = doses
        self.position_units = position_units
        self.dose_units = dose_units

    @staticmethod
    def _validate_array(arr: np.ndarray, label: str) -> np.ndarray:
        """Ensure array is numpy.ndarray, flattened, non-empty and finite."""
        if not isinstance(arr, np.ndarray):
            raise TypeError(f"{label} must be a numpy.ndarray (got {type(arr)}).")
        arr = np.array(arr, dtype=float).ravel()
        if arr.size == 0:
            raise DegenerateProfile(f"{label} array cannot be empty.")
        if np.any(~np.isfinite(arr)):
            raise ValueError(f"{label} array contains non-finite values.")
        return arr

    def __len__(self) -> int:
        return int(self.positions.size)

    def __repr__(self) -> str:
        return (f"{type(self).__name__}(n={len(self)}, "
                f"x=[{self.positions[0]:g}, {self.positions[-1]:g}] {self.position_units}, "
                f"max_dose={self.max_dose:g})")

    @property
    def max_dose(self) -> float:
        return float(np.max(self.doses))

    def get_data(self) -> Tuple[np.ndarray, np.ndarray]:
        """Return (positions, doses) as writable copies."""
        return self.positions.copy(), self.doses.copy()

    def same_positions(self, other: DoseProfile) -> bool:
        """True if both profiles are sampled at exactly the same positions."""
        return np.array_equal(self.positions, other.positions)

    def interpolate(self, x) -> np.ndarray:
        """
        Linearly interpolate the dose at position(s) x.

        Positions outside the profile domain take the boundary dose
        (no extrapolation).
        """
        return np.interp(x, self.positions, self.doses)

    def plot(self, *, ax: Optional[plt.Axes] = None, **kwargs):
        """Plot dose against position."""
        if ax is None:
            _, ax = plt.subplots()

        ax.plot(self.positions, self.doses, **kwargs)
        ax.set_xlabel(f"Position [{self.position_units}]")
        ax.set_ylabel(f"Dose [{self.dose_units}]")
        ax.set_ylim(bottom=0)
        return ax


class ResampledProfile(DoseProfile):
    """
    Densely sampled copy of a profile, used as the search space of the
    DTA and gamma evaluations. Not part of the public API beyond the
    value returned by `analyzer.resample`.
    """

    def __init__(self, *, positions: np.ndarray, doses: np.ndarray, step: float,
                 position_units: str = "cm", dose_units: str = "a.u."):
        super().__init__(positions=positions, doses=doses,
                         position_units=position_units, dose_units=dose_units)
        self.step = float(step)


@dataclass(frozen=True)
class GammaSettings:
    """Configuration of a gamma index evaluation.

    Attributes
    ----------
    use_global_max : bool
        If True, the dose criterion is a fraction of the maximum reference
        dose. If False, it is a fraction of the local reference dose at each
        candidate point.
    dose_criterion : float
        Allowed relative dose difference (0.03 = 3 %).
    dist_criterion : float
        Allowed spatial displacement, in position units.
    resample_step : float
        Step used to densify the reference profile for the search.
    dose_threshold : float
        Samples whose reference dose is below this fraction of the maximum
        reference dose are excluded from the pass rate.
    """
    use_global_max: bool = True
    dose_criterion: float = 0.03
    dist_criterion: float = 0.3
    resample_step: float = 0.01
    dose_threshold: float = 0.1

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """Raise InvalidConfiguration unless every numeric field is finite and > 0."""
        for name in ("dose_criterion", "dist_criterion", "resample_step", "dose_threshold"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float, np.floating, np.integer)):
                raise InvalidConfiguration(f"{name} must be a real number (got {value!r}).")
            if not np.isfinite(value) or value <= 0:
                raise InvalidConfiguration(f"{name} must be a positive finite value (got {value!r}).")

    def label(self) -> str:
        """Return human-readable label like '3%/0.3 (global)'."""
        mode = "global" if self.use_global_max else "local"
        return f"{self.dose_criterion * 100:g}%/{self.dist_criterion:g} ({mode})"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


GAMMA_3_03_GLOBAL = GammaSettings()
GAMMA_2_02_GLOBAL = GammaSettings(dose_criterion=0.02, dist_criterion=0.2)


@dataclass(frozen=True, eq=False)
class GammaResult:
    """Result container for a 1D gamma evaluation.

    Attributes
    ----------
    gamma : np.ndarray
        One value per test sample; ``nan`` marks samples excluded by the
        low-dose threshold.
    pass_rate : float
        Fraction of evaluated samples with gamma <= 1.0 (0 to 1).
    positions : np.ndarray
        Positions of the test samples.
    settings : GammaSettings
        Settings used for this evaluation.
    """
    gamma: np.ndarray
    pass_rate: float
    positions: np.ndarray
    settings: GammaSettings

    @property
    def excluded(self) -> np.ndarray:
        return np.isnan(self.gamma)

    @property
    def evaluated_gamma(self) -> np.ndarray:
        return self.gamma[~self.excluded]

    @property
    def n_evaluated(self) -> int:
        return int(np.count_nonzero(~self.excluded))

    @property
    def n_passed(self) -> int:
        return int(np.count_nonzero(self.evaluated_gamma <= 1.0))

    def statistics(self) -> Dict[str, float]:
        """Summary statistics over the evaluated (non-excluded) samples."""
        valid = self.evaluated_gamma
        return {
            "mean": float(np.mean(valid)),
            "median": float(np.median(valid)),
            "min": float(np.min(valid)),
            "max": float(np.max(valid)),
            "p95": float(np.percentile(valid, 95)),
            "pass_rate_1.0": float(np.sum(valid <= 1.0) / valid.size),
            "pass_rate_1.1": float(np.sum(valid <= 1.1) / valid.size),
        }

    def __repr__(self) -> str:
        return (f"GammaResult(pass_rate={self.pass_rate:.1%}, "
                f"n_eval={self.n_evaluated}, settings='{self.settings.label()}')")
