from __future__ import annotations

import logging
import warnings
import numpy as np
from typing import Literal

from .core import (DoseProfile, ResampledProfile, GammaSettings, GammaResult,
                   InvalidConfiguration, ProfileMismatch, DegenerateProfile)
from .utils import _resample_positions, _row_blocks

"""
    Dose comparison methods for 1D profiles: resampling, pointwise dose
    difference, diagnostic distance-to-agreement and the gamma index.

    distance_to_agreement() and compute_gamma() look alike but answer
    different questions. DTA only reports how far the nearest point of
    (almost) equal dose is; gamma minimizes the combined normalized
    dose/distance metric. They are kept as separate code paths.
"""

logger = logging.getLogger(__name__)

DEFAULT_MATCH_TOLERANCE = 0.001
NO_MATCH_DISTANCE = 10.0


def _check_aligned(test: DoseProfile, reference: DoseProfile) -> None:
    """Raise ProfileMismatch unless both profiles share the same positions."""
    if len(test) != len(reference):
        raise ProfileMismatch(
            f"Test and reference must have the same number of samples "
            f"(got {len(test)} and {len(reference)}).")
    if not test.same_positions(reference):
        raise ProfileMismatch("Test and reference must be sampled at identical positions.")


def resample(profile: DoseProfile, step: float) -> ResampledProfile:
    """
    Densify a profile at a fixed step by linear interpolation.

    The grid starts at the first original position and advances by `step`
    until the position reaches (last - step). The final original sample
    is usually not part of the result.

    Parameters
    ----------
    profile : DoseProfile
        Profile to resample (at least 2 samples).
    step : float
        Positive step, in position units.

    Returns
    -------
    ResampledProfile
    """
    if isinstance(step, bool) or not np.isfinite(step) or step <= 0:
        raise InvalidConfiguration(f"Resample step must be a positive finite value (got {step!r}).")
    if len(profile) < 2:
        raise DegenerateProfile("Resampling requires a profile with at least 2 samples.")

    positions = _resample_positions(start=float(profile.positions[0]),
                                    stop=float(profile.positions[-1]),
                                    step=float(step))
    doses = profile.interpolate(positions)
    return ResampledProfile(positions=positions, doses=doses, step=step,
                            position_units=profile.position_units,
                            dose_units=profile.dose_units)


def dose_difference(test: DoseProfile, reference: DoseProfile) -> np.ndarray:
    """Absolute pointwise dose difference |D_test - D_ref| (no interpolation)."""
    _check_aligned(test, reference)
    return np.abs(test.doses - reference.doses)


def _dta_scan(test: DoseProfile, ref: DoseProfile, tol: float) -> np.ndarray:
    """Exhaustive search over every resampled point, in row blocks."""
    dta = np.full(len(test), NO_MATCH_DISTANCE, dtype=float)
    for rows in _row_blocks(n_rows=len(test), n_cols=len(ref)):
        dd = np.abs(test.doses[rows, None] - ref.doses[None, :])
        dist = np.abs(test.positions[rows, None] - ref.positions[None, :])
        dist = np.where(dd <= tol, dist, np.inf)
        best = np.min(dist, axis=1)
        found = np.isfinite(best)
        dta[rows][found] = best[found]
    return dta


def _dta_sorted(test: DoseProfile, ref: DoseProfile, tol: float) -> np.ndarray:
    """
    Same result as _dta_scan. Resampled points are sorted by dose once,
    a widened dose window is located by binary search, then the exact
    |dD| <= tol test is applied to the window only.
    """
    order = np.argsort(ref.doses, kind="stable")
    sorted_doses = ref.doses[order]
    sorted_positions = ref.positions[order]

    lo = np.searchsorted(sorted_doses, test.doses - 2.0 * tol, side="left")
    hi = np.searchsorted(sorted_doses, test.doses + 2.0 * tol, side="right")

    dta = np.full(len(test), NO_MATCH_DISTANCE, dtype=float)
    for m in range(len(test)):
        window = slice(lo[m], hi[m])
        match = np.abs(test.doses[m] - sorted_doses[window]) <= tol
        if np.any(match):
            dta[m] = np.min(np.abs(test.positions[m] - sorted_positions[window][match]))
    return dta


def distance_to_agreement(test: DoseProfile,
                          resampled_reference: DoseProfile,
                          match_tolerance: float = DEFAULT_MATCH_TOLERANCE,
                          *,
                          method: Literal["sorted", "scan"] = "sorted") -> np.ndarray:
    """
    Distance-to-agreement of every test sample.

    For each test sample, the minimum |x_test - x_ref| over the resampled
    reference points whose dose is within `match_tolerance` of the test
    dose. Samples without any such point get NO_MATCH_DISTANCE (10.0).

    Parameters
    ----------
    test : DoseProfile
        Evaluated profile.
    resampled_reference : DoseProfile
        Search space, usually the output of resample().
    match_tolerance : float, default=0.001
        Absolute dose tolerance for a match (dose units). Unrelated to
        the gamma dose criterion.
    method : {"sorted", "scan"}, default="sorted"
        "scan" compares every pair; "sorted" restricts the comparison to a
        dose window. Both give identical results.
    """
    if isinstance(match_tolerance, bool) or not np.isfinite(match_tolerance) or match_tolerance <= 0:
        raise InvalidConfiguration(
            f"match_tolerance must be a positive finite value (got {match_tolerance!r}).")
    if method == "scan":
        return _dta_scan(test, resampled_reference, float(match_tolerance))
    if method == "sorted":
        return _dta_sorted(test, resampled_reference, float(match_tolerance))
    raise InvalidConfiguration(f"Unsupported DTA method '{method}'. Choose 'sorted' or 'scan'.")


def _min_gamma(x: np.ndarray, d: np.ndarray,
               ref: ResampledProfile, dist_criterion: float,
               dose_norm) -> np.ndarray:
    """
    min_j sqrt(((x_i - x_j)/dist)^2 + ((d_i - D_j)/norm_j)^2) for every i.

    dose_norm is either a scalar (global) or one value per resampled point
    (local). A zero norm yields a zero dose term for equal doses and an
    infinite one otherwise.
    """
    gamma = np.empty(x.size, dtype=float)
    for rows in _row_blocks(n_rows=x.size, n_cols=len(ref)):
        dist_term = (x[rows, None] - ref.positions[None, :]) / dist_criterion
        diff = d[rows, None] - ref.doses[None, :]
        with np.errstate(divide="ignore", invalid="ignore"):
            dose_term = diff / dose_norm
        dose_term = np.where(np.isnan(dose_term), 0.0, dose_term)
        g = np.sqrt(dist_term ** 2 + dose_term ** 2)
        gamma[rows] = np.min(g, axis=1)
    return gamma


def compute_gamma(test: DoseProfile,
                  reference: DoseProfile,
                  settings: GammaSettings) -> GammaResult:
    """
    Gamma index of a test profile against a reference profile.

    The reference is resampled at `settings.resample_step` on every call.
    Samples whose reference dose is below `dose_threshold * max(D_ref)` are
    excluded (gamma = nan) and do not enter the pass rate. A gamma of
    exactly 1.0 passes.

    Parameters
    ----------
    test : DoseProfile
        Evaluated profile.
    reference : DoseProfile
        Reference profile, sampled at the same positions as `test`.
    settings : GammaSettings
        Criteria, normalization mode, resample step and threshold.

    Returns
    -------
    GammaResult
    """
    settings.validate()
    _check_aligned(test, reference)

    ref_max = reference.max_dose
    excluded = reference.doses < settings.dose_threshold * ref_max
    if np.all(excluded):
        raise InvalidConfiguration(
            f"dose_threshold={settings.dose_threshold!r} excludes every sample.")

    if settings.resample_step > settings.dist_criterion:
        warnings.warn(
            f"Resample step ({settings.resample_step:g}) is coarser than the distance "
            f"criterion ({settings.dist_criterion:g}); gamma values will be overestimated.")

    resampled = resample(reference, settings.resample_step)
    logger.debug("Gamma %s: %d test samples (%d excluded) against %d resampled points",
                 settings.label(), len(test), int(np.count_nonzero(excluded)), len(resampled))

    if settings.use_global_max:
        dose_norm = settings.dose_criterion * ref_max
    else:
        dose_norm = settings.dose_criterion * resampled.doses[None, :]

    evaluated = ~excluded
    gamma = np.full(len(test), np.nan, dtype=float)
    gamma[evaluated] = _min_gamma(test.positions[evaluated], test.doses[evaluated],
                                  resampled, settings.dist_criterion, dose_norm)

    pass_rate = float(np.count_nonzero(gamma[evaluated] <= 1.0)) / float(np.count_nonzero(evaluated))
    return GammaResult(gamma=gamma, pass_rate=pass_rate,
                       positions=test.positions.copy(), settings=settings)
